from __future__ import annotations


class FrameError(ConnectionError):
    """Transport-level fault on the framed byte stream. Always fatal."""


class TruncatedFrameError(FrameError):
    """The stream ended after a frame had started but before it completed."""

    def __init__(self, expected: int, received: int, part: str) -> None:
        super().__init__(
            f"stream ended mid-frame: {part} expected {expected} bytes, got {received}"
        )
        self.expected = expected
        self.received = received
        self.part = part


class FrameTooLargeError(FrameError):
    """Frame length exceeds what the header can encode or the configured limit."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"frame of {length} bytes exceeds limit of {limit} bytes")
        self.length = length
        self.limit = limit


class RequestDecodeError(ValueError):
    """Payload is not a recognized request. Recoverable: answered with an error."""
