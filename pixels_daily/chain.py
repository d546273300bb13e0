"""
Event feed for the Pixels contract over Ethereum JSON-RPC.

Reads `PixelsChanged` logs with `eth_getLogs` and turns their ABI-encoded
`(uint256[] pixelsToken, bytes colors)` payload into explicit
(pixel index, color index) pairs.
"""

import httpx

from pixels_daily.errors import MalformedEventError, RpcError
from pixels_daily.models import Block, ChangeEvent

WORD = 32


def _word(data: bytes, offset: int) -> int:
    chunk = data[offset:offset + WORD]
    if len(chunk) != WORD:
        raise MalformedEventError(f"Log data truncated at byte {offset}")
    return int.from_bytes(chunk, "big")


def decode_pixels_changed(data: str) -> tuple[tuple[int, int], ...]:
    """Decode a PixelsChanged log payload into (pixel, color) pairs."""
    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    except ValueError as e:
        raise MalformedEventError(f"Log data is not hex: {e}") from e

    pixels_offset = _word(raw, 0)
    colors_offset = _word(raw, WORD)

    pixel_count = _word(raw, pixels_offset)
    pixels = [_word(raw, pixels_offset + WORD * (i + 1)) for i in range(pixel_count)]

    color_count = _word(raw, colors_offset)
    colors = raw[colors_offset + WORD:colors_offset + WORD + color_count]
    if len(colors) != color_count:
        raise MalformedEventError("Colors payload truncated")

    if pixel_count != color_count:
        raise MalformedEventError(
            f"{pixel_count} pixels but {color_count} colors in one event"
        )

    return tuple(zip(pixels, colors))


def parse_log(entry: dict) -> ChangeEvent:
    removed = bool(entry.get("removed", False))
    return ChangeEvent(
        block_number=int(entry["blockNumber"], 16),
        log_index=int(entry.get("logIndex") or "0x0", 16),
        # Retracted logs are skipped by the reconciler, no need to decode them
        changes=() if removed else decode_pixels_changed(entry["data"]),
        removed=removed,
    )


class ChainFeed:
    """Blocking JSON-RPC client exposing the event feed contract."""

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        topic: str,
        block_range: int = 5000,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self.rpc_url = rpc_url
        self.contract_address = contract_address
        self.topic = topic
        self.block_range = block_range
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(connect=5.0, read=timeout, write=timeout, pool=5.0)
        )
        self._request_id = 0
        self._timestamps: dict[int, int] = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def _rpc(self, method: str, params: list):
        self._request_id += 1
        response = self._client.post(
            self.rpc_url,
            json={"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params},
        )
        response.raise_for_status()
        body = response.json()
        if body.get("error"):
            raise RpcError(method, body["error"])
        return body.get("result")

    def get_block_number(self) -> int:
        return int(self._rpc("eth_blockNumber", []), 16)

    def get_block(self, number: int) -> Block:
        # Blocks are immutable once mined; one lookup per block per run
        if number not in self._timestamps:
            block = self._rpc("eth_getBlockByNumber", [hex(number), False])
            if block is None:
                raise RpcError("eth_getBlockByNumber", {"message": f"block {number} not found"})
            self._timestamps[number] = int(block["timestamp"], 16)
        return Block(number=number, timestamp=self._timestamps[number])

    def query_events(self, from_block: int, to_block: int) -> list[ChangeEvent]:
        """
        Return PixelsChanged events in `[from_block, to_block]`, oldest first.

        The range is split into windows of `block_range` blocks so providers
        with a getLogs span limit still answer.
        """
        events = []
        for start in range(from_block, to_block + 1, self.block_range):
            end = min(start + self.block_range - 1, to_block)
            logs = self._rpc("eth_getLogs", [{
                "address": self.contract_address,
                "topics": [self.topic],
                "fromBlock": hex(start),
                "toBlock": hex(end),
            }])
            window = [parse_log(entry) for entry in logs or []]
            window.sort(key=lambda e: (e.block_number, e.log_index))
            events.extend(window)
        return events
