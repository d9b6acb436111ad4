"""Shared test fixtures and helpers."""

from __future__ import annotations

import re

import pytest

from astralex.lexer import tokenize
from astralex.tokens import Category, Token

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        result = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in result.tokens if t.category != Category.EOF]

    return _lex


def strip_ansi(text: str) -> str:
    """Remove color escape sequences."""
    return _ANSI.sub("", text)


def make_tokens(source: str, categories: list[Category], *, eof: bool = False) -> list[Token]:
    """Pair each whitespace-separated piece of *source* with a category, in order."""
    pieces = list(re.finditer(r"\S+", source))
    assert len(pieces) == len(categories), f"{len(pieces)} pieces, {len(categories)} categories"
    tokens = [Token(c, m.start(), m.end() - m.start()) for m, c in zip(pieces, categories)]
    if eof:
        tokens.append(Token(Category.EOF, len(source), 0))
    return tokens


def assert_categories(tokens: list[Token], expected: list[Category]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], source: str, expected: list[str]) -> None:
    """Assert that the token source slices match the expected list."""
    actual = [t.text(source) for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
