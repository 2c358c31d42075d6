"""Escape decoding for quoted string literals."""

from __future__ import annotations

_ESCAPES = {"n": "\n", "t": "\t"}


def unescape_string(raw: str) -> str:
    """Decode a closed quoted literal into its word value.

    Algorithm:
    1. Require at least two characters with a ``"`` at each end.
    2. Strip the two quotes.
    3. Scan left to right: an unarmed backslash arms an escape and is
       dropped; the armed character maps ``n`` to newline, ``t`` to tab,
       and anything else to itself.

    A trailing unarmed backslash cannot occur for input produced by the
    scanner (it would have escaped the closing quote); it is dropped.
    """
    if len(raw) < 2 or raw[0] != '"' or raw[-1] != '"':
        raise ValueError(f"invalid string word: {raw!r}")

    out = []
    escape = False
    for ch in raw[1:-1]:
        if escape:
            out.append(_ESCAPES.get(ch, ch))
            escape = False
        elif ch == "\\":
            escape = True
        else:
            out.append(ch)
    return "".join(out)
