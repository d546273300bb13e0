"""
Blob publishers. Each exposes `store_blob(data) -> cid`.

KuboPublisher adds blobs to a local IPFS node through its HTTP API;
NftStoragePublisher uploads them to NFT.Storage. Both are content-addressed,
so publishing identical bytes twice yields the same CID.
"""

import httpx

from pixels_daily.config import Settings
from pixels_daily.errors import PublishError


def _timeout(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(connect=5.0, read=seconds, write=seconds, pool=5.0)


class KuboPublisher:
    def __init__(self, api_url: str, timeout: float = 30.0, client: httpx.Client | None = None):
        self.api_url = api_url
        self._client = client or httpx.Client(timeout=_timeout(timeout))

    def close(self):
        self._client.close()

    def store_blob(self, data: bytes) -> str:
        response = self._client.post(
            f"{self.api_url}/add",
            params={"pin": "true", "cid-version": "1"},
            files={"file": ("blob", data, "application/octet-stream")},
        )
        response.raise_for_status()
        cid = response.json().get("Hash")
        if not cid:
            raise PublishError(f"IPFS add returned no CID: {response.text.strip()}")
        return cid


class NftStoragePublisher:
    def __init__(
        self,
        token: str,
        api_url: str = "https://api.nft.storage",
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self.api_url = api_url
        self._client = client or httpx.Client(timeout=_timeout(timeout))
        self._headers = {"Authorization": f"Bearer {token}"}

    def close(self):
        self._client.close()

    def store_blob(self, data: bytes) -> str:
        response = self._client.post(
            f"{self.api_url}/upload",
            content=data,
            headers={**self._headers, "Content-Type": "application/octet-stream"},
        )
        response.raise_for_status()
        body = response.json()
        if not body.get("ok"):
            raise PublishError(f"NFT.Storage upload failed: {body.get('error')}")
        return body["value"]["cid"]


def make_publisher(settings: Settings):
    """Build the publisher selected by the PUBLISHER setting."""
    if settings.PUBLISHER == "kubo":
        return KuboPublisher(settings.IPFS_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)

    if not settings.NFT_STORAGE_TOKEN:
        raise PublishError("NFT_STORAGE_TOKEN is required when PUBLISHER=nft_storage")
    return NftStoragePublisher(
        settings.NFT_STORAGE_TOKEN,
        api_url=settings.NFT_STORAGE_API_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
