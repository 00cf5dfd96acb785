from .errors import FrameError, FrameTooLargeError, RequestDecodeError, TruncatedFrameError
from .channel import MAX_FRAME_BYTES, MessageChannel

__all__ = [
    "FrameError",
    "FrameTooLargeError",
    "RequestDecodeError",
    "TruncatedFrameError",
    "MAX_FRAME_BYTES",
    "MessageChannel",
]
