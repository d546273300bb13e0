import pytest
from pydantic import ValidationError

from pixels_daily.config import CanvasConfig, Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # keep a developer .env out of the way
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_canvas_defaults_match_contract():
    config = CanvasConfig()
    assert (config.width, config.height) == (256, 256)
    assert config.pixel_count == 65536
    assert config.epoch == 1643649762
    assert config.day_length_seconds == 86400
    assert len(config.palette) == 16


def test_canvas_config_is_frozen():
    config = CanvasConfig(width=2, height=2)
    with pytest.raises(ValidationError):
        config.width = 3


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("RPC_URL", "http://node:8545")
    monkeypatch.setenv("PIXELS_CHANGED_TOPIC", "0xabc")
    monkeypatch.setenv("PUBLISHER", "kubo")
    monkeypatch.setenv("LOG_BLOCK_RANGE", "100")

    settings = get_settings()

    assert settings.RPC_URL == "http://node:8545"
    assert settings.PUBLISHER == "kubo"
    assert settings.LOG_BLOCK_RANGE == 100
    assert settings.CONTRACT_ADDRESS == "0x01419A742Ec2675c7d65e5f3104ef632bb957851"
    assert settings.PUBLIC_DIR == "public"


def test_settings_from_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("RPC_URL", raising=False)
    monkeypatch.delenv("PIXELS_CHANGED_TOPIC", raising=False)
    (tmp_path / ".env").write_text("RPC_URL=http://dotenv\nPIXELS_CHANGED_TOPIC=0x01\nUNRELATED=1\n")

    assert get_settings().RPC_URL == "http://dotenv"


def test_missing_rpc_url_fails(monkeypatch):
    monkeypatch.delenv("RPC_URL", raising=False)
    monkeypatch.setenv("PIXELS_CHANGED_TOPIC", "0xabc")
    with pytest.raises(ValidationError):
        Settings()


def test_unknown_publisher_rejected(monkeypatch):
    monkeypatch.setenv("RPC_URL", "http://node")
    monkeypatch.setenv("PIXELS_CHANGED_TOPIC", "0xabc")
    monkeypatch.setenv("PUBLISHER", "s3")
    with pytest.raises(ValidationError):
        Settings()
