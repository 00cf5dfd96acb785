from __future__ import annotations

import json
import logging
import struct
from typing import Any, BinaryIO

from pressure_host.protocol.errors import FrameTooLargeError, TruncatedFrameError

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<I")
MAX_FRAME_BYTES = 0xFFFFFFFF


class MessageChannel:
    """Length-prefixed framing over a pair of binary streams.

    Each frame is a 4-byte little-endian unsigned length followed by that
    many payload bytes. Reads block; there is no timeout, so a silent
    peer stalls the caller indefinitely.
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        max_frame_bytes: int | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self.max_frame_bytes = max_frame_bytes

    # ── frames ──────────────────────────────────────────

    def read_frame(self) -> bytes | None:
        """Return the next payload, or ``None`` on clean end of stream."""
        header = self._read_exact(_HEADER.size)
        if not header:
            return None
        if len(header) < _HEADER.size:
            raise TruncatedFrameError(_HEADER.size, len(header), "header")

        (length,) = _HEADER.unpack(header)
        if self.max_frame_bytes is not None and length > self.max_frame_bytes:
            raise FrameTooLargeError(length, self.max_frame_bytes)

        payload = self._read_exact(length)
        if len(payload) < length:
            raise TruncatedFrameError(length, len(payload), "payload")
        logger.debug("Read frame (%d bytes)", length)
        return payload

    def write_frame(self, payload: bytes) -> None:
        if len(payload) > MAX_FRAME_BYTES:
            raise FrameTooLargeError(len(payload), MAX_FRAME_BYTES)
        self._writer.write(_HEADER.pack(len(payload)))
        self._writer.write(payload)
        self._writer.flush()
        logger.debug("Wrote frame (%d bytes)", len(payload))

    # ── JSON helpers ────────────────────────────────────

    def read_message(self) -> Any | None:
        payload = self.read_frame()
        if payload is None:
            return None
        return json.loads(payload)

    def write_message(self, message: Any) -> None:
        # Serialize fully before touching the stream so no partial frame is sent.
        payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
        self.write_frame(payload)

    # ── internals ───────────────────────────────────────

    def _read_exact(self, size: int) -> bytes:
        """Read up to ``size`` bytes, stopping early only at end of stream."""
        chunks: list[bytes] = []
        remaining = size
        while remaining > 0:
            chunk = self._reader.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)
