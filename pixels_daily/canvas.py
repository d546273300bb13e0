from pixels_daily.config import CanvasConfig
from pixels_daily.errors import MalformedEventError
from pixels_daily.models import ChangeEvent


class CanvasState:
    """
    Working copy of the canvas color indices during a run.

    The buffer is owned by this object; callers get copies through
    `snapshot()` (immutable, for rendering) or `pixels()` (for checkpoints).
    """

    def __init__(self, config: CanvasConfig, pixels: list[int] | None = None):
        self.config = config
        if pixels is None:
            self._pixels = [0] * config.pixel_count
        else:
            if len(pixels) != config.pixel_count:
                raise ValueError(
                    f"Canvas needs {config.pixel_count} pixels, got {len(pixels)}"
                )
            self._pixels = list(pixels)

    def __len__(self) -> int:
        return len(self._pixels)

    def __getitem__(self, index: int) -> int:
        return self._pixels[index]

    def apply_pixel(self, index: int, color_index: int):
        if not 0 <= index < len(self._pixels):
            raise MalformedEventError(
                f"Pixel {index} outside {self.config.width}x{self.config.height} canvas"
            )
        if not self.config.palette.is_valid(color_index):
            raise MalformedEventError(f"Color {color_index} not in palette (pixel {index})")
        self._pixels[index] = color_index

    def apply_event(self, event: ChangeEvent):
        # Later pairs win when an event touches the same pixel twice
        for index, color_index in event.changes:
            self.apply_pixel(index, color_index)

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._pixels)

    def pixels(self) -> list[int]:
        return list(self._pixels)
