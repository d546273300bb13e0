import httpx
import pytest

from pixels_daily.config import Settings
from pixels_daily.errors import PublishError
from pixels_daily.storage import KuboPublisher, NftStoragePublisher, make_publisher


def test_kubo_add_returns_hash():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={"Name": "blob", "Hash": "bafykubo", "Size": "4"})

    publisher = KuboPublisher("http://ipfs:5001/api/v0", client=httpx.Client(transport=httpx.MockTransport(handler)))
    assert publisher.store_blob(b"\x89PNG") == "bafykubo"
    assert seen["url"].startswith("http://ipfs:5001/api/v0/add?")
    assert "pin=true" in seen["url"]
    assert b"\x89PNG" in seen["body"]


def test_kubo_without_hash_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    publisher = KuboPublisher("http://ipfs", client=httpx.Client(transport=transport))
    with pytest.raises(PublishError):
        publisher.store_blob(b"x")


def test_nft_storage_upload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.read()
        return httpx.Response(200, json={"ok": True, "value": {"cid": "bafynft"}})

    publisher = NftStoragePublisher("secret", api_url="https://nft", client=httpx.Client(transport=httpx.MockTransport(handler)))
    assert publisher.store_blob(b"metadata") == "bafynft"
    assert seen == {"auth": "Bearer secret", "body": b"metadata"}


def test_nft_storage_not_ok_raises():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"ok": False, "error": {"message": "quota"}})
    )
    publisher = NftStoragePublisher("t", client=httpx.Client(transport=transport))
    with pytest.raises(PublishError):
        publisher.store_blob(b"x")


def test_nft_storage_http_error_propagates():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"ok": False}))
    publisher = NftStoragePublisher("t", client=httpx.Client(transport=transport))
    with pytest.raises(httpx.HTTPStatusError):
        publisher.store_blob(b"x")


def test_make_publisher_selects_backend():
    base = {"RPC_URL": "http://node", "PIXELS_CHANGED_TOPIC": "0x00"}
    assert isinstance(make_publisher(Settings(**base, PUBLISHER="kubo")), KuboPublisher)
    assert isinstance(
        make_publisher(Settings(**base, PUBLISHER="nft_storage", NFT_STORAGE_TOKEN="t")),
        NftStoragePublisher,
    )
    with pytest.raises(PublishError):
        make_publisher(Settings(**base, PUBLISHER="nft_storage", NFT_STORAGE_TOKEN=None))
