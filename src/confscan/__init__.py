"""Scanner for line-oriented config and script files."""

from __future__ import annotations

from confscan.errors import ConfScanError, LexError, ScanError
from confscan.scanner import Scanner, tokenize
from confscan.tokens import Position, Token, TokenKind, format_kinds

__version__ = "0.1.0"

__all__ = [
    "ConfScanError",
    "LexError",
    "Position",
    "ScanError",
    "Scanner",
    "Token",
    "TokenKind",
    "format_kinds",
    "tokenize",
]
