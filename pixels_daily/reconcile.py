"""
Incremental canvas reconciliation.

A run loads the checkpoint, replays every PixelsChanged event between the
checkpointed block and the chain head, emits one snapshot per day boundary
crossed, then saves the new checkpoint. Each day's snapshot shows the canvas
as it stood when that day ended, before any pixel of the next day is applied.

Nothing is written to the checkpoint until every snapshot of the run has been
published, so a failed run leaves the previous checkpoint in place and the
next run replays the same window.
"""

from pixels_daily.canvas import CanvasState
from pixels_daily.checkpoint import CheckpointStore
from pixels_daily.config import CanvasConfig
from pixels_daily.day_clock import block_to_day
from pixels_daily.logs import banner, log, success, warn
from pixels_daily.models import Checkpoint, EmittedSnapshot, ReconcileResult
from pixels_daily.snapshot import SnapshotEmitter


class Reconciler:
    def __init__(
        self,
        config: CanvasConfig,
        feed,
        emitter: SnapshotEmitter,
        store: CheckpointStore,
    ):
        self.config = config
        self.feed = feed
        self.emitter = emitter
        self.store = store

    def block_number_to_day(self, block_number: int) -> int:
        return block_to_day(self.feed.get_block(block_number), self.config)

    def _flush_days(self, canvas: CanvasState, start: int, end: int) -> list[EmittedSnapshot]:
        """Emit snapshots for days in [start, end) from the current canvas."""
        emitted = []
        pixels = canvas.snapshot()
        for day in range(start, end):
            log(f"Generating canvas snapshot for day {day}!")
            emitted.append(self.emitter.emit(pixels, day))
        return emitted

    def run(self) -> ReconcileResult:
        banner("Starting cache update")

        checkpoint = self.store.load()
        cache_block_number = checkpoint.block_number
        current_block_number = self.feed.get_block_number()

        result = ReconcileResult(from_block=cache_block_number, to_block=current_block_number)

        if current_block_number < cache_block_number:
            warn(
                f"Chain head {current_block_number} is behind checkpoint block "
                f"{cache_block_number}, nothing to do"
            )
            return result

        events = self.feed.query_events(cache_block_number, current_block_number)

        cache_day = self.block_number_to_day(cache_block_number)
        current_day = self.block_number_to_day(current_block_number)
        result.from_day, result.to_day = cache_day, current_day

        log(f"Pixel changes between block number {cache_block_number} and {current_block_number}:")

        canvas = CanvasState(self.config, checkpoint.pixels)

        for event in events:
            if event.removed:
                result.events_skipped += 1
                continue

            event_day = self.block_number_to_day(event.block_number)

            if event_day != cache_day:
                result.snapshots.extend(self._flush_days(canvas, cache_day, event_day))

            canvas.apply_event(event)
            for pixel, color in event.changes:
                log(f"Pixel {pixel} set to color {color}")

            result.events_applied += 1
            cache_day = event_day

        if cache_day != current_day:
            result.snapshots.extend(self._flush_days(canvas, cache_day, current_day))

        self.store.save(Checkpoint(block_number=current_block_number, pixels=canvas.pixels()))
        result.checkpoint_written = True

        success(
            f"Finished cache update: {result.events_applied} events, "
            f"{len(result.snapshots)} snapshots"
        )
        return result
