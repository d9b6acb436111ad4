"""Inline renderer tests."""

from __future__ import annotations

import logging

from astralex.colors import GRAY, GREEN, RED, YELLOW
from astralex.lexer import tokenize
from astralex.palette import DEFAULT_POLICY
from astralex.render import render
from astralex.tokens import Category, Token

from .conftest import make_tokens, strip_ansi

C = Category
P = DEFAULT_POLICY


class TestVerbatim:
    def test_no_tokens_is_identity(self):
        text = "let x = (1, 2)\n  ok"
        assert render(text, []) == text

    def test_empty_source(self):
        assert render("", [Token(C.EOF, 0, 0)]) == ""

    def test_gaps_are_not_colored(self):
        source = "a   b"
        tokens = make_tokens(source, [C.WORD, C.WORD], eof=True)
        assert render(source, tokens) == P.color_of(C.WORD).paint("a") + "   " + P.color_of(
            C.WORD
        ).paint("b")

    def test_stripped_output_reproduces_source(self):
        source = 'let x = ("hi" + [1, 2]) // c\n  y.z ::= `t`\n'
        result = tokenize(source)
        assert result.is_success
        assert strip_ansi(render(source, result.tokens)) == source

    def test_stripped_output_reproduces_failed_source(self):
        source = "a (b\n'open"
        result = tokenize(source)
        assert not result.is_success
        assert strip_ansi(render(source, result.tokens)) == source

    def test_trailing_text_without_eof(self):
        source = "a b"
        tokens = [Token(C.WORD, 0, 1)]
        assert render(source, tokens) == P.color_of(C.WORD).paint("a") + " b"


class TestEndOfStream:
    def test_stops_at_eof(self):
        source = "a b c"
        tokens = [Token(C.WORD, 0, 1), Token(C.EOF, 2, 0), Token(C.WORD, 4, 1)]
        output = render(source, tokens)
        assert strip_ansi(output) == "a "
        assert "c" not in output

    def test_trailing_text_after_eof_is_dropped(self):
        source = "a   trailing"
        tokens = [Token(C.WORD, 0, 1), Token(C.EOF, 1, 0)]
        assert render(source, tokens) == P.color_of(C.WORD).paint("a")


class TestColors:
    def test_base_colors(self):
        source = "x = 1"
        tokens = make_tokens(source, [C.WORD, C.EQUALS, C.NUMBER], eof=True)
        expected = " ".join(
            [
                P.color_of(C.WORD).paint("x"),
                RED.paint("="),
                P.color_of(C.NUMBER).paint("1"),
            ]
        )
        assert render(source, tokens) == expected

    def test_unmapped_category_uses_fallback(self):
        tokens = make_tokens("+", [C.PLUS])
        assert render("+", tokens) == P.fallback.paint("+")

    def test_policy_override(self):
        policy = DEFAULT_POLICY.with_overrides({C.WORD: GRAY})
        assert render("w", make_tokens("w", [C.WORD]), policy) == GRAY.paint("w")


class TestScopes:
    def test_balanced_brackets_keep_base_colors(self):
        source = "( x )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.WORD, C.CLOSE_PARENTHESIS])
        expected = " ".join([YELLOW.paint("("), P.color_of(C.WORD).paint("x"), YELLOW.paint(")")])
        assert render(source, tokens) == expected

    def test_mismatched_closer_gets_mismatch_color(self):
        source = "( ]"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.CLOSE_BRACKET])
        output = render(source, tokens)
        assert output == YELLOW.paint("(") + " " + P.mismatch.paint("]")
        assert YELLOW.paint("]") not in output

    def test_stray_closer_gets_mismatch_color(self):
        assert render(")", make_tokens(")", [C.CLOSE_PARENTHESIS])) == P.mismatch.paint(")")

    def test_mismatch_does_not_close_scope(self):
        source = "( ] )"
        tokens = make_tokens(source, [C.OPEN_PARENTHESIS, C.CLOSE_BRACKET, C.CLOSE_PARENTHESIS])
        assert render(source, tokens).endswith(YELLOW.paint(")"))

    def test_quote_content_is_tinted(self):
        source = '" hi "'
        tokens = make_tokens(source, [C.OPEN_DOUBLE_QUOTE, C.WORD, C.CLOSE_DOUBLE_QUOTE])
        quote = GREEN.lighter
        assert render(source, tokens) == " ".join(
            [quote.paint('"'), GREEN.paint("hi"), quote.paint('"')]
        )

    def test_opener_inside_quote_is_content(self):
        source = '" ( "'
        tokens = make_tokens(
            source, [C.OPEN_DOUBLE_QUOTE, C.OPEN_PARENTHESIS, C.CLOSE_DOUBLE_QUOTE]
        )
        quote = GREEN.lighter
        assert render(source, tokens) == " ".join(
            [quote.paint('"'), GREEN.paint("("), quote.paint('"')]
        )

    def test_scope_is_closed_after_quote(self):
        source = '" ( " x'
        tokens = make_tokens(
            source, [C.OPEN_DOUBLE_QUOTE, C.OPEN_PARENTHESIS, C.CLOSE_DOUBLE_QUOTE, C.WORD]
        )
        assert render(source, tokens).endswith(" " + P.color_of(C.WORD).paint("x"))

    def test_closer_inside_quote_gets_quote_mismatch_tint(self):
        source = '" ) "'
        tokens = make_tokens(
            source, [C.OPEN_DOUBLE_QUOTE, C.CLOSE_PARENTHESIS, C.CLOSE_DOUBLE_QUOTE]
        )
        assert GREEN.darken(0.1).paint(")") in render(source, tokens)

    def test_single_quote_content(self):
        source = "' a '"
        tokens = make_tokens(source, [C.OPEN_SINGLE_QUOTE, C.WORD, C.CLOSE_SINGLE_QUOTE])
        assert GREEN.lighter.paint("a") in render(source, tokens)

    def test_block_comment_content_is_gray(self):
        source = "/* note */"
        tokens = make_tokens(source, [C.OPEN_BLOCK_COMMENT, C.WORD, C.CLOSE_BLOCK_COMMENT])
        assert render(source, tokens) == " ".join(
            [GRAY.paint("/*"), GRAY.paint("note"), GRAY.paint("*/")]
        )

    def test_content_inside_bracket_is_not_tinted(self):
        source = "[ 1 ]"
        tokens = make_tokens(source, [C.OPEN_BRACKET, C.NUMBER, C.CLOSE_BRACKET])
        assert P.color_of(C.NUMBER).paint("1") in render(source, tokens)

    def test_quote_inside_bracket(self):
        source = '( " x " )'
        tokens = make_tokens(
            source,
            [C.OPEN_PARENTHESIS, C.OPEN_DOUBLE_QUOTE, C.WORD, C.CLOSE_DOUBLE_QUOTE, C.CLOSE_PARENTHESIS],
        )
        output = render(source, tokens)
        assert GREEN.paint("x") in output
        assert output.endswith(YELLOW.paint(")"))


class TestPreconditions:
    def test_overlapping_token_is_logged(self, caplog):
        source = "abc"
        tokens = [Token(C.WORD, 0, 3), Token(C.WORD, 1, 1)]
        with caplog.at_level(logging.WARNING, logger="astralex"):
            render(source, tokens)
        assert "overlaps" in caplog.text
