"""Token dumps for the command line and for debugging."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from confscan.tokens import Token


def format_token(token: Token) -> str:
    """Render one token as ``start-end Kind 'value'``."""
    line = f"{token.start}-{token.end} {token.kind.label} {token.value!r}"
    if token.error is not None:
        line += f" error: {token.error.message}"
    return line


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable token listing to *file*."""
    for token in tokens:
        file.write(format_token(token) + "\n")


def token_to_dict(token: Token) -> dict[str, Any]:
    return {
        "kind": token.kind.name,
        "value": token.value,
        "start": [token.start.line, token.start.column],
        "end": [token.end.line, token.end.column],
        "error": token.error.message if token.error is not None else None,
    }


def dump_tokens_json(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Write the tokens to *file* as a JSON array."""
    json.dump([token_to_dict(t) for t in tokens], file, indent=2)
    file.write("\n")
