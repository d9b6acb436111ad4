"""Color policy: base color per token category plus scope-context tints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from astralex.colors import BLUE, CYAN, GRAY, GREEN, MAGENTA, ORANGE, RED, RGB, YELLOW
from astralex.errors import ConfigError
from astralex.tokens import Category

C = Category

DEFAULT_COLORS: dict[Category, RGB] = {
    # words
    C.WORD: CYAN,
    C.HYBRID: CYAN.lighter,
    C.NUMBER: BLUE,
    C.ESCAPE: GREEN.brighter,
    C.UNDERSCORE: CYAN.brighter,
    C.DOUBLE_UNDERSCORE: CYAN.brighter,
    C.TRIPLE_UNDERSCORE: CYAN.brighter,
    # comments
    C.OPEN_BLOCK_COMMENT: GRAY,
    C.CLOSE_BLOCK_COMMENT: GRAY,
    C.DOC_HASH_COMMENT: GRAY,
    C.EOL_HASH_COMMENT: GRAY,
    C.EOL_SLASH_COMMENT: GRAY,
    # brackets
    C.OPEN_PARENTHESIS: YELLOW,
    C.CLOSE_PARENTHESIS: YELLOW,
    C.OPEN_BRACE: YELLOW,
    C.CLOSE_BRACE: YELLOW,
    C.OPEN_BRACKET: YELLOW,
    C.CLOSE_BRACKET: YELLOW,
    C.OPEN_ANGLE: YELLOW,
    C.CLOSE_ANGLE: YELLOW,
    # quotes
    C.OPEN_DOUBLE_QUOTE: GREEN.lighter,
    C.CLOSE_DOUBLE_QUOTE: GREEN.lighter,
    C.OPEN_SINGLE_QUOTE: GREEN.lighter.lighter,
    C.CLOSE_SINGLE_QUOTE: GREEN.lighter.lighter,
    C.OPEN_BACKTICK: YELLOW.lighter,
    C.CLOSE_BACKTICK: YELLOW.lighter,
    # assigners
    C.DOUBLE_RIGHT_ANGLE: RED,
    C.DOUBLE_LEFT_ANGLE: RED,
    C.EQUALS: RED,
    C.DASH: RED,
    C.COLON_ASSIGNER: RED,
    C.DOUBLE_COLON_ASSIGNER: RED,
    C.TRIPLE_COLON_ASSIGNER: RED,
    C.RIGHT_CHEVRON: RED,
    C.LEFT_CHEVRON: RED,
    C.RIGHT_EQUALS_ARROW: RED,
    C.LEFT_EQUALS_ARROW: RED,
    C.RIGHT_TILDE_ARROW: RED,
    C.LEFT_TILDE_ARROW: RED,
    C.RIGHT_DASH_ARROW: RED,
    C.LEFT_DASH_ARROW: RED,
    C.RIGHT_PLUS_ARROW: RED,
    C.LEFT_PLUS_ARROW: RED,
    C.HASH_COLON: MAGENTA.darker,
    C.DOUBLE_HASH_COLON: MAGENTA.darker,
    C.DOUBLE_HASH_DOUBLE_COLON: MAGENTA.darker,
    C.COLON_RIGHT_ANGLE: MAGENTA.darker,
    C.COLON_DOUBLE_RIGHT_ANGLE: MAGENTA.darker,
    C.DOUBLE_COLON_DOUBLE_RIGHT_ANGLE: MAGENTA.darker,
    C.DOUBLE_COLON_EQUALS: MAGENTA.darker,
    C.DOUBLE_COLON_RIGHT_ANGLE: MAGENTA.darker,
    # compound assigners
    C.PLUS_EQUALS: RED.lighter,
    C.MINUS_EQUALS: RED.lighter,
    C.TIMES_EQUALS: RED.lighter,
    C.DIVISION_EQUALS: RED.lighter,
    C.PERCENT_EQUALS: RED.lighter,
    C.DOUBLE_QUESTION_EQUALS: MAGENTA.darker,
    C.DOUBLE_BANG_EQUALS: MAGENTA.darker,
    C.DOT_EQUALS: MAGENTA.darker,
    # comparison
    C.DOUBLE_EQUALS: MAGENTA.darker,
    C.GREATER_OR_EQUALS: MAGENTA.darker,
    C.EQUALS_OR_LESS: MAGENTA.darker,
    C.GREATER_THAN: MAGENTA.darker,
    C.LESS_THAN: MAGENTA.darker,
    C.BANG_EQUALS: MAGENTA.darker,
    C.QUESTION_EQUALS: MAGENTA.darker,
    C.HASH_EQUALS: MAGENTA.darker,
    C.DOUBLE_HASH_EQUALS: MAGENTA.darker,
    # lookup
    C.DOT: MAGENTA.brighter,
    C.SLASH: MAGENTA.brighter,
    C.DOUBLE_DOT: MAGENTA.brighter,
    C.TRIPLE_DOT: MAGENTA.brighter,
    C.DOUBLE_COLON_PREFIX: MAGENTA.brighter,
    C.DOT_BANG: MAGENTA.brighter,
    C.BANG_DOT: MAGENTA.brighter,
    C.QUESTION_DOT: MAGENTA.brighter,
    C.DOT_QUESTION: MAGENTA.brighter,
    C.DOUBLE_DOT_BANG: MAGENTA.brighter,
    C.DOUBLE_DOT_QUESTION: MAGENTA.brighter,
    # tags
    C.HASH: YELLOW.brighter,
    C.DOUBLE_HASH: YELLOW.brighter,
    # tag lookups
    C.DOT_HASH: ORANGE,
    C.DOUBLE_DOT_HASH: ORANGE,
}

# Plain content inside a quote-like scope, keyed by the scope's opener
CONTENT_TINTS: dict[Category, RGB] = {
    C.OPEN_DOUBLE_QUOTE: GREEN,
    C.OPEN_SINGLE_QUOTE: GREEN.lighter,
    C.OPEN_BACKTICK: YELLOW.darker,
    C.OPEN_BLOCK_COMMENT: GRAY,
}

# Mismatched closers inside a quote-like scope
MISMATCH_TINTS: dict[Category, RGB] = {
    C.OPEN_DOUBLE_QUOTE: GREEN.darken(0.1),
    C.OPEN_SINGLE_QUOTE: GREEN.lighten(0.1),
    C.OPEN_BACKTICK: YELLOW.darken(0.1),
    C.OPEN_BLOCK_COMMENT: GRAY.darken(0.1),
}


def _frozen(mapping: Mapping[Category, RGB]) -> Mapping[Category, RGB]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True, eq=False)
class ColorPolicy:
    """Immutable category -> color mapping with scope-context overrides."""

    colors: Mapping[Category, RGB] = field(default_factory=lambda: _frozen(DEFAULT_COLORS))
    fallback: RGB = MAGENTA
    mismatch: RGB = RED.brighter
    content_tints: Mapping[Category, RGB] = field(default_factory=lambda: _frozen(CONTENT_TINTS))
    mismatch_tints: Mapping[Category, RGB] = field(
        default_factory=lambda: _frozen(MISMATCH_TINTS)
    )

    def color_of(self, category: Category) -> RGB:
        """Base color for *category*; unmapped categories get the fallback."""
        return self.colors.get(category, self.fallback)

    def content_color(self, scope: Category | None, default: RGB) -> RGB:
        """Color for plain content inside a scope opened by *scope*."""
        if scope is None:
            return default
        return self.content_tints.get(scope, default)

    def mismatch_color(self, scope: Category | None) -> RGB:
        """Color for a closer that does not match the scope opened by *scope*."""
        if scope is None:
            return self.mismatch
        return self.mismatch_tints.get(scope, self.mismatch)

    def with_overrides(self, overrides: Mapping[Category, RGB]) -> ColorPolicy:
        """Return a copy with some base colors replaced."""
        colors = dict(self.colors)
        colors.update(overrides)
        return ColorPolicy(
            colors=_frozen(colors),
            fallback=self.fallback,
            mismatch=self.mismatch,
            content_tints=self.content_tints,
            mismatch_tints=self.mismatch_tints,
        )


DEFAULT_POLICY = ColorPolicy()


def parse_overrides(table: Mapping[str, object]) -> dict[Category, RGB]:
    """Convert a ``{CATEGORY_NAME: color}`` table into policy overrides."""
    overrides: dict[Category, RGB] = {}
    for name, value in table.items():
        try:
            category = Category[str(name).upper()]
        except KeyError:
            raise ConfigError(f"unknown token category {name!r}") from None
        if not isinstance(value, str):
            raise ConfigError(f"color for {name} must be a string, got {type(value).__name__}")
        overrides[category] = RGB.parse(value)
    return overrides
