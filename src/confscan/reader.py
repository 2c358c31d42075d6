"""Character reader with single-character pushback and position tracking.

Characters are pulled from the underlying stream in chunks into an indexed
buffer, and the offset at which each line starts is recorded as the chunk
arrives. Pushback is a cursor decrement and a position is derived from the
cursor by a search over the line starts, so unreading across a line
boundary needs no remembered state.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from typing import Protocol

from confscan.errors import ScanError
from confscan.tokens import Position

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096


class TextSource(Protocol):
    def read(self, size: int = -1, /) -> str: ...


class CharReader:
    """Read characters one at a time from a string or text stream."""

    def __init__(self, source: str | TextSource, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size
        self._chars: list[str] = []
        # Offsets of the first character of each line; line N starts at
        # _line_starts[N - 1].
        self._line_starts: list[int] = [0]
        self._index = 0
        self._can_unread = False

        if isinstance(source, str):
            self._stream: TextSource | None = None
            self._extend(source)
            self._exhausted = True
        else:
            self._stream = source
            self._exhausted = False

    @property
    def position(self) -> Position:
        """Position of the next character to be read."""
        return self._position_at(self._index)

    @property
    def text(self) -> str:
        """All text pulled from the source so far."""
        return "".join(self._chars)

    def read(self) -> str | None:
        """Return the next character, or None at end of stream."""
        if self._index >= len(self._chars) and not self._fill():
            self._can_unread = False
            return None
        ch = self._chars[self._index]
        self._index += 1
        self._can_unread = True
        return ch

    def unread(self) -> None:
        """Push the last read character back so the next read returns it."""
        if not self._can_unread:
            raise ScanError("unread without a preceding read", self.position)
        self._index -= 1
        self._can_unread = False

    def peek(self) -> str | None:
        """Return the next character without consuming it."""
        if self._index >= len(self._chars) and not self._fill():
            return None
        return self._chars[self._index]

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def _fill(self) -> bool:
        """Pull one chunk from the stream. Return False once exhausted."""
        if self._exhausted or self._stream is None:
            return False
        try:
            chunk = self._stream.read(self._chunk_size)
        except (OSError, UnicodeDecodeError) as exc:
            raise ScanError(f"failed to read input: {exc}", self.position) from exc
        if not isinstance(chunk, str):
            raise ScanError(
                f"input stream must yield decoded text, got {type(chunk).__name__}",
                self.position,
            )
        if not chunk:
            self._exhausted = True
            logger.debug("input exhausted at %s", self._position_at(len(self._chars)))
            return False
        self._extend(chunk)
        return True

    def _extend(self, text: str) -> None:
        base = len(self._chars)
        self._chars.extend(text)
        start = 0
        while (nl := text.find("\n", start)) != -1:
            self._line_starts.append(base + nl + 1)
            start = nl + 1

    def _position_at(self, index: int) -> Position:
        line = bisect_right(self._line_starts, index)
        return Position(line, index - self._line_starts[line - 1] + 1)
