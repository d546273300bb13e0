from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pixels_daily.palette import DEFAULT_PALETTE, ColorPalette

# Pixels contract (Rinkeby) constants
CONTRACT_ADDRESS = "0x01419A742Ec2675c7d65e5f3104ef632bb957851"
CONTRACT_CREATION_TIMESTAMP = 1643649762
CANVAS_WIDTH = 256
CANVAS_HEIGHT = 256
DAY_LENGTH_SECONDS = 60 * 60 * 24


class CanvasConfig(BaseModel):
    """Fixed canvas geometry, palette and day epoch shared by a run."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=CANVAS_WIDTH, gt=0)
    height: int = Field(default=CANVAS_HEIGHT, gt=0)
    palette: ColorPalette = DEFAULT_PALETTE
    epoch: int = CONTRACT_CREATION_TIMESTAMP
    day_length_seconds: int = Field(default=DAY_LENGTH_SECONDS, gt=0)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


class Settings(BaseSettings):
    # Runtime values used by the snapshot job
    RPC_URL: str
    PIXELS_CHANGED_TOPIC: str
    CONTRACT_ADDRESS: str = CONTRACT_ADDRESS
    LOG_BLOCK_RANGE: int = Field(default=5000, gt=0)  # Max blocks per eth_getLogs call

    PUBLIC_DIR: str = "public"
    PUBLISHER: Literal["kubo", "nft_storage"] = "nft_storage"
    IPFS_API_URL: str = "http://localhost:5001/api/v0"
    NFT_STORAGE_API_URL: str = "https://api.nft.storage"
    NFT_STORAGE_TOKEN: str | None = None

    HTTP_TIMEOUT_SECONDS: float = 30.0
    SNAPSHOT_INTERVAL_MINUTES: int = 60  # Used by --watch

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once; tests clear the cache after changing the env."""
    return Settings()
