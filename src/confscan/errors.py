"""Error types with formatted source context."""

from __future__ import annotations

from confscan.tokens import Position


class ConfScanError(Exception):
    """Base for scanner errors, carrying a message and a source position."""

    def __init__(self, message: str, position: Position) -> None:
        self.message = message
        self.position = position
        super().__init__(f"{position}: {message}")

    def format(self, source: str = "", filename: str = "input.conf") -> str:
        lines = source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class ScanError(ConfScanError):
    """Raised when the input stream cannot be read; fatal to the scan."""


class LexError(ConfScanError):
    """Lexical error attached to an INVALID token; scanning may continue."""
