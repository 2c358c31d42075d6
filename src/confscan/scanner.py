"""Config scanner: converts a character stream into typed, positioned tokens."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator

from confscan.errors import LexError
from confscan.reader import DEFAULT_CHUNK_SIZE, CharReader, TextSource
from confscan.strings import unescape_string
from confscan.tokens import Position, Token, TokenKind, is_space

logger = logging.getLogger(__name__)

_SHELL_TRIGGERS = "!@"


class Scanner:
    """Produce one token per scan() call until EOF.

    Once the input is exhausted every further scan() returns an EOF token at
    the same position. A scanner is bound to one input and is not reusable.
    """

    def __init__(self, source: str | TextSource, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._reader = CharReader(source, chunk_size)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF token."""
        while True:
            token = self.scan()
            yield token
            if token.kind is TokenKind.EOF:
                return

    @property
    def text(self) -> str:
        """Source text consumed from the input so far."""
        return self._reader.text

    def scan(self) -> Token:
        """Return the next token. Raises ScanError if the input cannot be read."""
        reader = self._reader
        start = reader.position
        ch = reader.read()

        if ch is None:
            token = self._emit(TokenKind.EOF, "", start)
        elif ch == "\n":
            token = self._emit(TokenKind.TERMINATOR, ch, start)
        elif is_space(ch):
            reader.unread()
            token = self._scan_whitespace(start)
        elif ch == "#":
            reader.unread()
            token = self._scan_to_end_of_line(TokenKind.COMMENT, start)
        elif ch in _SHELL_TRIGGERS:
            reader.unread()
            token = self._scan_to_end_of_line(TokenKind.SHELL_COMMAND, start)
        elif ch == "-" and reader.peek() == "-":
            reader.read()  # second dash
            word = self._scan_word(start)
            token = dataclasses.replace(word, kind=TokenKind.OPTION, value="-" + word.value)
        elif ch == '"':
            reader.unread()
            token = self._scan_string(start)
        else:
            reader.unread()
            token = self._scan_word(start)

        logger.debug("%s %r at %s-%s", token.kind.label, token.value, token.start, token.end)
        return token

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(
        self, kind: TokenKind, value: str, start: Position, error: LexError | None = None
    ) -> Token:
        return Token(kind, value, start, self._reader.position, error)

    # ------------------------------------------------------------------
    # Sub-scanners
    # ------------------------------------------------------------------

    def _scan_whitespace(self, start: Position) -> Token:
        reader = self._reader
        chars = []
        while True:
            ch = reader.read()
            if ch is None:
                break
            if ch == "\\":
                if reader.peek() == "\n":
                    # Line continuation: drop both and keep going
                    reader.read()
                    continue
                reader.unread()
                break
            if ch == "\n" or not is_space(ch):
                reader.unread()
                break
            chars.append(ch)
        return self._emit(TokenKind.WHITESPACE, "".join(chars), start)

    def _scan_to_end_of_line(self, kind: TokenKind, start: Position) -> Token:
        reader = self._reader
        chars = []
        while True:
            ch = reader.read()
            if ch is None:
                break
            if ch == "\n":
                reader.unread()
                break
            chars.append(ch)
        return self._emit(kind, "".join(chars), start)

    def _scan_word(self, start: Position) -> Token:
        reader = self._reader
        chars = []
        while True:
            ch = reader.read()
            if ch is None:
                break
            if is_space(ch):
                reader.unread()
                break
            chars.append(ch)
        return self._emit(TokenKind.WORD, "".join(chars), start)

    def _scan_string(self, start: Position) -> Token:
        reader = self._reader
        reader.read()  # opening quote
        raw = ['"']
        escape = False
        while True:
            ch = reader.read()
            if ch is None:
                error = LexError("unterminated string", start)
                return self._emit(TokenKind.INVALID, "".join(raw), start, error)
            raw.append(ch)
            if ch == "\\" and not escape:
                escape = True
                continue
            if ch == '"' and not escape:
                break
            escape = False
        return self._emit(TokenKind.WORD, unescape_string("".join(raw)), start)


def tokenize(source: str | TextSource) -> list[Token]:
    """Convenience function: scan source and return all tokens, EOF included."""
    return list(Scanner(source))
