"""Token kinds, data structures, and character classification helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from confscan.errors import LexError


class TokenKind(Enum):
    INVALID = "Invalid"  # lexical error, see Token.error
    WORD = "Word"  # plain or decoded quoted word
    OPTION = "Option"  # --name, value keeps one leading dash
    WHITESPACE = "White Space"  # spaces/tabs, continuations elided
    COMMENT = "Comment"  # # to end of line
    SHELL_COMMAND = "Shell Command"  # ! or @ to end of line
    TERMINATOR = "Terminator"  # \n
    EOF = "EOF"

    @property
    def label(self) -> str:
        return self.value


def format_kinds(kinds: Iterable[TokenKind]) -> str:
    """Render a set of kinds for diagnostics, e.g. ``"Word or Option"``.

    Labels follow declaration order regardless of the iteration order of
    *kinds*, so ``{OPTION, WORD}`` and ``[WORD, OPTION]`` format the same.
    """
    wanted = set(kinds)
    return " or ".join(kind.label for kind in TokenKind if kind in wanted)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Source position, 1-based line and column."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanner token.

    ``start`` is the position of the first consumed character and ``end`` the
    position just past the last one, so consecutive tokens share a boundary.
    """

    kind: TokenKind
    value: str
    start: Position
    end: Position
    error: LexError | None = field(default=None, compare=False)

    def __eq__(self, other: object) -> bool:
        # Errors are exceptions, so compare them by message
        if not isinstance(other, Token):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.start == other.start
            and self.end == other.end
            and _error_message(self.error) == _error_message(other.error)
        )

    @property
    def is_eof(self) -> bool:
        return self.kind is TokenKind.EOF


def _error_message(error: LexError | None) -> str | None:
    return error.message if error is not None else None


def is_space(ch: str) -> bool:
    """Return True if ch is a whitespace character (newline included)."""
    return ch.isspace()
