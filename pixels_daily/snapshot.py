"""
Daily canvas snapshots.

For each finished day the emitter renders the canvas to PNG, publishes the
image, then publishes a metadata record pointing at it. Artifacts are also
kept on disk:

    <day>-image.png          encoded canvas
    <day>-metadata.json      {"name", "description", "image_data"}
    <day>-metadata-ipfs.txt  ipfs:// link to the published metadata
"""

import io
import json
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from pixels_daily.config import CanvasConfig
from pixels_daily.logs import log, success
from pixels_daily.models import EmittedSnapshot, SnapshotMetadata

DESCRIPTION = "The pixels daily snapshot"
URI_SCHEME = "ipfs://"


def render_png(pixels: Sequence[int], config: CanvasConfig) -> bytes:
    """Encode color indices as an opaque RGBA PNG."""
    if len(pixels) != config.pixel_count:
        raise ValueError(f"Expected {config.pixel_count} pixels, got {len(pixels)}")

    rgba = bytearray()
    for color_index in pixels:
        rgba.extend(config.palette.rgba(color_index))

    image = Image.frombytes("RGBA", (config.width, config.height), bytes(rgba))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def build_metadata(day: int, image_cid: str) -> SnapshotMetadata:
    return SnapshotMetadata(
        name=f"Pixels Day #{day}",
        description=DESCRIPTION,
        image_data=f"{URI_SCHEME}{image_cid}",
    )


class SnapshotEmitter:
    def __init__(self, config: CanvasConfig, publisher, output_dir: Path):
        self.config = config
        self.publisher = publisher
        self.output_dir = Path(output_dir)

    def paths(self, day: int) -> tuple[Path, Path, Path]:
        return (
            self.output_dir / f"{day}-image.png",
            self.output_dir / f"{day}-metadata.json",
            self.output_dir / f"{day}-metadata-ipfs.txt",
        )

    def emit(self, pixels: Sequence[int], day: int) -> EmittedSnapshot:
        """
        Render, store and publish the snapshot for `day`.

        Any publish failure propagates; the caller must not treat the day as
        done unless this returns.
        """
        image_path, metadata_path, metadata_uri_path = self.paths(day)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        image_bytes = render_png(pixels, self.config)
        image_path.write_bytes(image_bytes)
        image_cid = self.publisher.store_blob(image_bytes)
        log(f"Day {day} image published: {image_cid}")

        metadata = build_metadata(day, image_cid)
        metadata_text = json.dumps(metadata.model_dump(), indent=2)
        metadata_path.write_text(metadata_text)
        metadata_cid = self.publisher.store_blob(metadata_text.encode())

        metadata_uri_path.write_text(f"{URI_SCHEME}{metadata_cid}")
        success(f"Day {day} metadata published: {metadata_cid}")

        return EmittedSnapshot(
            day=day,
            image_cid=image_cid,
            metadata_cid=metadata_cid,
            image_path=str(image_path),
            metadata_path=str(metadata_path),
            metadata_uri_path=str(metadata_uri_path),
        )
