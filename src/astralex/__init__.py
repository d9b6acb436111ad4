"""Astra lexer CLI: colorized token stream rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from astralex.palette import ColorPolicy

__version__ = "0.1.0"


def colorize(source: str, policy: ColorPolicy | None = None) -> str:
    """Lex Astra source and return it with ANSI colors interleaved."""
    from astralex.lexer import tokenize
    from astralex.palette import DEFAULT_POLICY
    from astralex.render import render

    result = tokenize(source)
    return render(result.source, result.tokens, policy or DEFAULT_POLICY)
