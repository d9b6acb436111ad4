"""Depth-annotated listing tests."""

from __future__ import annotations

from astralex.colors import BLUE, GREEN, RED, CycleColors
from astralex.lexer import tokenize
from astralex.palette import DEFAULT_POLICY
from astralex.render import DepthMark, depth_marks, describe, render_with_depth
from astralex.tokens import Category

from .conftest import make_tokens, strip_ansi

C = Category


def _depths(marks: list[DepthMark | None]) -> list[int | None]:
    return [m.depth if m else None for m in marks]


class TestDepthMarks:
    def test_balanced_nesting(self):
        tokens = make_tokens("( x )", [C.OPEN_PARENTHESIS, C.WORD, C.CLOSE_PARENTHESIS])
        marks = depth_marks(tokens, CycleColors())
        assert _depths(marks) == [1, None, 1]
        assert marks[0].opens
        assert not marks[2].opens

    def test_openers_only_count_up(self):
        openers = [C.OPEN_PARENTHESIS, C.OPEN_BRACE, C.OPEN_BRACKET, C.OPEN_ANGLE]
        tokens = make_tokens("( { [ <", openers)
        assert _depths(depth_marks(tokens, CycleColors())) == [1, 2, 3, 4]

    def test_delimiters_inside_quote_are_not_marked(self):
        tokens = make_tokens('" ( ) "', [
            C.OPEN_DOUBLE_QUOTE,
            C.OPEN_PARENTHESIS,
            C.CLOSE_PARENTHESIS,
            C.CLOSE_DOUBLE_QUOTE,
        ])
        assert _depths(depth_marks(tokens, CycleColors())) == [1, None, None, 1]

    def test_bracket_in_string_does_not_shift_later_depths(self):
        marks = depth_marks(tokenize('"(" ( )').tokens, CycleColors())
        assert _depths(marks) == [1, None, 1, 1, 1, None]
        assert marks[0].opens
        assert not marks[2].opens

    def test_same_color_at_open_and_close(self):
        tokens = make_tokens("( [ ] )", [
            C.OPEN_PARENTHESIS,
            C.OPEN_BRACKET,
            C.CLOSE_BRACKET,
            C.CLOSE_PARENTHESIS,
        ])
        marks = depth_marks(tokens, CycleColors([RED, BLUE]))
        assert marks[0].color == marks[3].color == RED
        assert marks[1].color == marks[2].color == BLUE

    def test_sibling_scopes_get_different_colors(self):
        tokens = make_tokens("( ) ( )", [
            C.OPEN_PARENTHESIS,
            C.CLOSE_PARENTHESIS,
            C.OPEN_PARENTHESIS,
            C.CLOSE_PARENTHESIS,
        ])
        marks = depth_marks(tokens, CycleColors())
        assert marks[0].depth == marks[2].depth == 1
        assert marks[0].color != marks[2].color

    def test_mismatched_closer_has_no_mark(self):
        tokens = make_tokens("( ] )", [C.OPEN_PARENTHESIS, C.CLOSE_BRACKET, C.CLOSE_PARENTHESIS])
        assert _depths(depth_marks(tokens, CycleColors())) == [1, None, 1]

    def test_stray_closer_has_no_mark(self):
        tokens = make_tokens(")", [C.CLOSE_PARENTHESIS])
        assert depth_marks(tokens, CycleColors()) == [None]

    def test_default_color_source(self):
        tokens = make_tokens("( )", [C.OPEN_PARENTHESIS, C.CLOSE_PARENTHESIS])
        marks = depth_marks(tokens)
        assert marks[0].color == marks[1].color


class TestLabels:
    def test_open_label_has_parentheses(self):
        assert DepthMark(2, GREEN, opens=True).label() == GREEN.paint("(2)")

    def test_close_label_is_bare(self):
        assert DepthMark(2, GREEN, opens=False).label() == GREEN.paint("2")


class TestRenderWithDepth:
    def test_one_line_per_token(self):
        source = "( x )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.WORD, C.CLOSE_PARENTHESIS], eof=True)
        lines = render_with_depth(tokens, source, colors=CycleColors())
        assert len(lines) == 4

    def test_depth_follows_token_text(self):
        source = "( x )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.WORD, C.CLOSE_PARENTHESIS])
        lines = [strip_ansi(line) for line in render_with_depth(tokens, source, colors=CycleColors())]
        assert lines == [
            "OPEN_PARENTHESIS [0:1] '('(1)",
            "WORD [2:3] 'x'",
            "CLOSE_PARENTHESIS [4:5] ')'1",
        ]

    def test_name_uses_base_color(self):
        source = "x"
        lines = render_with_depth(make_tokens(source, [C.WORD]), source)
        assert lines[0].startswith(DEFAULT_POLICY.color_of(C.WORD).paint("WORD"))

    def test_label_uses_scope_color(self):
        source = "( )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.CLOSE_PARENTHESIS])
        lines = render_with_depth(tokens, source, colors=CycleColors([BLUE]))
        assert lines[0].endswith(BLUE.paint("(1)"))
        assert lines[1].endswith(BLUE.paint("1"))


class TestDescribe:
    def test_plain_has_no_colors_or_depth(self):
        source = "( x )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.WORD, C.CLOSE_PARENTHESIS])
        lines = describe(tokens, source, colorize=False)
        assert lines == [
            "OPEN_PARENTHESIS [0:1] '('",
            "WORD [2:3] 'x'",
            "CLOSE_PARENTHESIS [4:5] ')'",
        ]

    def test_colorized_matches_render_with_depth(self):
        source = "[ ]"
        tokens = make_tokens(source, [C.OPEN_BRACKET, C.CLOSE_BRACKET])
        assert describe(tokens, source, colors=CycleColors()) == render_with_depth(
            tokens, source, colors=CycleColors()
        )
