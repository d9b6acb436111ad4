"""Scope tracker: the stack of currently open delimiter tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from astralex.colors import RGB
from astralex.delimiters import is_quote_like, required_opener
from astralex.errors import CategoryTableError
from astralex.tokens import Role, Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Scope:
    """An open scope: the opener instance, its color, and its 1-based depth."""

    opener: Token
    color: RGB
    depth: int


class ScopeTracker:
    """LIFO stack of open scopes for a single render pass.

    A quote-like scope on top of the stack swallows any further opener: it is
    treated as content rather than pushed.
    """

    def __init__(self) -> None:
        self._stack: list[Scope] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def top(self) -> Scope | None:
        return self._stack[-1] if self._stack else None

    @property
    def in_quote(self) -> bool:
        """True when the innermost scope is quote-like."""
        top = self.top
        return top is not None and is_quote_like(top.opener.category)

    def open(self, token: Token, color: RGB) -> Scope | None:
        """Push a scope for *token*, or return None if the current quote absorbs it."""
        if token.role is not Role.OPENER:
            raise CategoryTableError(f"{token.category.name} is not an opening delimiter")
        if self.in_quote:
            return None
        scope = Scope(token, color, len(self._stack) + 1)
        self._stack.append(scope)
        return scope

    def matches(self, token: Token) -> bool:
        """True if closer *token* closes the innermost open scope."""
        top = self.top
        return top is not None and required_opener(token.category) is top.opener.category

    def close(self, token: Token) -> Scope | None:
        """Pop and return the scope closed by *token*; None on a mismatch."""
        if not self.matches(token):
            top = self.top
            logger.debug(
                "mismatched %s at %d (innermost scope: %s)",
                token.category.name,
                token.start,
                top.opener.category.name if top else "none",
            )
            return None
        return self._stack.pop()
