from pixels_daily.config import CanvasConfig
from pixels_daily.models import Block


def timestamp_to_day(timestamp: int, epoch: int, day_length_seconds: int) -> int:
    """
    Map a block timestamp to its day index.

    Day 0 covers everything before `epoch`; day 1 starts at `epoch` itself and
    every following day is `day_length_seconds` long.
    """
    return max((timestamp - epoch) // day_length_seconds + 1, 0)


def block_to_day(block: Block, config: CanvasConfig) -> int:
    return timestamp_to_day(block.timestamp, config.epoch, config.day_length_seconds)
