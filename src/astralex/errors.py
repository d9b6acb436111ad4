"""Error types with formatted source context."""

from __future__ import annotations

from astralex.tokens import Position


class LexError(Exception):
    """A lexing error with position and source context.

    The lexer collects these into a Failure result rather than raising them.
    """

    def __init__(self, message: str, position: Position, source: str, length: int = 1) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.length = length
        super().__init__(f"{message} ({position.line}:{position.column})")

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the span, clipped to the end of the line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class CategoryTableError(Exception):
    """Raised when the category tables are inconsistent or misused."""


class ConfigError(Exception):
    """Raised on an invalid configuration value."""
