"""Persisted `{blockNumber, pixels}` record between runs."""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from pixels_daily.config import CanvasConfig
from pixels_daily.errors import CheckpointError
from pixels_daily.logs import log, warn
from pixels_daily.models import Checkpoint


class CheckpointStore:
    def __init__(self, path: Path, config: CanvasConfig):
        self.path = Path(path)
        self.config = config

    def empty(self) -> Checkpoint:
        return Checkpoint(block_number=0, pixels=[0] * self.config.pixel_count)

    def load(self) -> Checkpoint:
        """Read the checkpoint, or start a zeroed one if none was saved yet."""
        if not self.path.exists():
            warn("Cache not found! Creating new one.")
            return self.empty()

        try:
            checkpoint = Checkpoint.model_validate(json.loads(self.path.read_text()))
        except (json.JSONDecodeError, ValidationError) as e:
            raise CheckpointError(f"Unreadable checkpoint {self.path}: {e}") from e

        if len(checkpoint.pixels) != self.config.pixel_count:
            raise CheckpointError(
                f"Checkpoint has {len(checkpoint.pixels)} pixels, "
                f"canvas needs {self.config.pixel_count}"
            )
        bad = next((c for c in checkpoint.pixels if not self.config.palette.is_valid(c)), None)
        if bad is not None:
            raise CheckpointError(f"Checkpoint contains unknown color index {bad}")

        log(f"Loaded checkpoint at block {checkpoint.block_number}")
        return checkpoint

    def save(self, checkpoint: Checkpoint):
        """Replace the checkpoint file in one step (temp file + rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(checkpoint.model_dump_json(by_alias=True))
        os.replace(tmp_path, self.path)
        log(f"Checkpoint saved at block {checkpoint.block_number}")
