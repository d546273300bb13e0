class PixelsError(Exception):
    """Base class for failures that abort a snapshot run."""


class MalformedEventError(PixelsError):
    """A change event does not fit the canvas or could not be decoded."""


class CheckpointError(PixelsError):
    """The persisted checkpoint does not match the configured canvas."""


class RpcError(PixelsError):
    """The JSON-RPC node answered with an error object."""

    def __init__(self, method: str, error: dict):
        self.method = method
        self.code = error.get("code")
        super().__init__(f"{method} failed ({self.code}): {error.get('message')}")


class PublishError(PixelsError):
    """The blob publisher did not return a content identifier."""
