"""Terminal renderers: inline source colorization and the depth-annotated listing."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from astralex.colors import RGB, ColorSource, RandomColors
from astralex.palette import DEFAULT_POLICY, ColorPolicy
from astralex.scopes import ScopeTracker
from astralex.tokens import Category, Role, Token

logger = logging.getLogger(__name__)


def render(source: str, tokens: Sequence[Token], policy: ColorPolicy = DEFAULT_POLICY) -> str:
    """Reproduce *source* with each token wrapped in its display color.

    Text between tokens is copied verbatim. Rendering stops at the EOF token;
    without one, the source after the last token is copied as-is.
    """
    parts: list[str] = []
    scopes = ScopeTracker()
    position = 0

    for token in tokens:
        if token.start < position:
            logger.warning(
                "token %s at %d overlaps the previous token ending at %d",
                token.category.name,
                token.start,
                position,
            )
        parts.append(source[position : token.start])
        position = token.end

        if token.category is Category.EOF:
            break

        color = _resolve_color(token, scopes, policy)
        parts.append(color.paint(token.text(source)))
    else:
        parts.append(source[position:])

    return "".join(parts)


def _resolve_color(token: Token, scopes: ScopeTracker, policy: ColorPolicy) -> RGB:
    color = policy.color_of(token.category)
    top = scopes.top
    kind = top.opener.category if top else None

    if token.role is Role.OPENER:
        if scopes.open(token, color) is None:
            # absorbed by the enclosing quote
            return policy.content_color(kind, color)
        return color

    if token.role is Role.CLOSER:
        if scopes.close(token) is None:
            return policy.mismatch_color(kind)
        return color

    return policy.content_color(kind, color)


# ---------------------------------------------------------------------------
# Depth-annotated listing
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DepthMark:
    """Depth annotation for an opener (``opens``) or its matching closer."""

    depth: int
    color: RGB
    opens: bool

    def label(self) -> str:
        text = f"({self.depth})" if self.opens else str(self.depth)
        return self.color.paint(text)


def depth_marks(
    tokens: Sequence[Token], colors: ColorSource | None = None
) -> list[DepthMark | None]:
    """Return one mark per token: openers, matched closers, or None."""
    if colors is None:
        colors = RandomColors()
    scopes = ScopeTracker()
    marks: list[DepthMark | None] = []

    for token in tokens:
        mark: DepthMark | None = None
        if token.role is Role.OPENER:
            # openers inside a quote are content and get no scope color
            scope = None if scopes.in_quote else scopes.open(token, colors.next_color())
            if scope is not None:
                mark = DepthMark(scope.depth, scope.color, opens=True)
        elif token.role is Role.CLOSER:
            scope = scopes.close(token)
            if scope is not None:
                mark = DepthMark(scope.depth, scope.color, opens=False)
        marks.append(mark)

    return marks


def render_with_depth(
    tokens: Sequence[Token],
    source: str,
    policy: ColorPolicy = DEFAULT_POLICY,
    colors: ColorSource | None = None,
) -> list[str]:
    """Colorized one-line labels, with nesting depth on openers and closers."""
    lines: list[str] = []
    for token, mark in zip(tokens, depth_marks(tokens, colors)):
        name = policy.color_of(token.category).paint(token.category.name)
        line = f"{name} [{token.start}:{token.end}] {token.text(source)!r}"
        if mark is not None:
            line += mark.label()
        lines.append(line)
    return lines


def describe(
    tokens: Sequence[Token],
    source: str,
    *,
    colorize: bool = True,
    policy: ColorPolicy = DEFAULT_POLICY,
    colors: ColorSource | None = None,
) -> list[str]:
    """Per-token display lines for the itemized token listing."""
    if colorize:
        return render_with_depth(tokens, source, policy, colors)
    return [token.describe(source) for token in tokens]
