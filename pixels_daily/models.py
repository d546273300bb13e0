from pydantic import BaseModel, ConfigDict, Field


class Checkpoint(BaseModel):
    """Last processed block and the canvas as it stood at that block."""
    model_config = ConfigDict(populate_by_name=True)

    block_number: int = Field(default=0, ge=0, alias="blockNumber")
    pixels: list[int]


class Block(BaseModel):
    number: int
    timestamp: int


class ChangeEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_number: int
    log_index: int = 0
    changes: tuple[tuple[int, int], ...]  # (pixel index, color index) in log order
    removed: bool = False


class SnapshotMetadata(BaseModel):
    name: str
    description: str
    image_data: str  # ipfs:// link to the image blob


class EmittedSnapshot(BaseModel):
    day: int
    image_cid: str
    metadata_cid: str
    image_path: str
    metadata_path: str
    metadata_uri_path: str


class ReconcileResult(BaseModel):
    from_block: int
    to_block: int
    from_day: int = 0
    to_day: int = 0
    events_applied: int = 0
    events_skipped: int = 0
    snapshots: list[EmittedSnapshot] = []
    checkpoint_written: bool = False
