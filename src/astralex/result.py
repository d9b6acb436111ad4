"""Lexer results: a complete token stream, or a partial one with errors."""

from __future__ import annotations

from dataclasses import dataclass

from astralex.errors import LexError
from astralex.tokens import Token


@dataclass(frozen=True, slots=True)
class Success:
    """All of the source was tokenized; tokens end with an EOF token."""

    source: str
    tokens: tuple[Token, ...]

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Tokens recovered before lexing failed, plus the errors encountered."""

    source: str
    tokens: tuple[Token, ...]
    errors: tuple[LexError, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Failure requires at least one error")

    @property
    def is_success(self) -> bool:
        return False


Result = Success | Failure
