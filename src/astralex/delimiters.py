"""Delimiter pairing table: which opener each closer is expected to close."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from astralex.errors import CategoryTableError
from astralex.tokens import Category, Role

PAIRS: Mapping[Category, Category] = MappingProxyType(
    {
        Category.CLOSE_PARENTHESIS: Category.OPEN_PARENTHESIS,
        Category.CLOSE_BRACE: Category.OPEN_BRACE,
        Category.CLOSE_BRACKET: Category.OPEN_BRACKET,
        Category.CLOSE_ANGLE: Category.OPEN_ANGLE,
        Category.CLOSE_DOUBLE_QUOTE: Category.OPEN_DOUBLE_QUOTE,
        Category.CLOSE_SINGLE_QUOTE: Category.OPEN_SINGLE_QUOTE,
        Category.CLOSE_BACKTICK: Category.OPEN_BACKTICK,
        Category.CLOSE_BLOCK_COMMENT: Category.OPEN_BLOCK_COMMENT,
    }
)

# Openers whose interior is opaque text: nothing nests inside them.
QUOTE_LIKE: frozenset[Category] = frozenset(
    {
        Category.OPEN_DOUBLE_QUOTE,
        Category.OPEN_SINGLE_QUOTE,
        Category.OPEN_BACKTICK,
        Category.OPEN_BLOCK_COMMENT,
    }
)


def required_opener(closer: Category) -> Category:
    """Return the opener category that *closer* is expected to close."""
    try:
        return PAIRS[closer]
    except KeyError:
        raise CategoryTableError(f"{closer.name} is not a closing delimiter") from None


def is_quote_like(category: Category) -> bool:
    return category in QUOTE_LIKE


def check_tables() -> None:
    """Verify that roles, pairs and quote-like openers agree with each other."""
    openers = {c for c in Category if c.role is Role.OPENER}
    closers = {c for c in Category if c.role is Role.CLOSER}

    missing = closers - PAIRS.keys()
    if missing:
        names = ", ".join(sorted(c.name for c in missing))
        raise CategoryTableError(f"closers without a paired opener: {names}")

    for closer, opener in PAIRS.items():
        if closer not in closers:
            raise CategoryTableError(f"pairing key {closer.name} is not a closer")
        if opener not in openers:
            raise CategoryTableError(f"pairing value {opener.name} is not an opener")

    unclosable = openers - set(PAIRS.values())
    if unclosable:
        names = ", ".join(sorted(c.name for c in unclosable))
        raise CategoryTableError(f"openers that nothing closes: {names}")

    if not QUOTE_LIKE <= openers:
        raise CategoryTableError("quote-like categories must all be openers")


check_tables()
