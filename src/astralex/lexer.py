"""Astra lexer: converts source text into a flat token stream."""

from __future__ import annotations

import logging

from astralex.errors import LexError
from astralex.result import Failure, Result, Success
from astralex.tokens import Category, Position, Token

logger = logging.getLogger(__name__)

C = Category

# Operator symbols, matched longest first
OPERATORS: dict[str, Category] = {
    # assigners
    ">>": C.DOUBLE_RIGHT_ANGLE,
    "<<": C.DOUBLE_LEFT_ANGLE,
    "=": C.EQUALS,
    "-": C.DASH,
    ":": C.COLON_ASSIGNER,
    "::": C.DOUBLE_COLON_ASSIGNER,
    ":::": C.TRIPLE_COLON_ASSIGNER,
    ">>>": C.RIGHT_CHEVRON,
    "<<<": C.LEFT_CHEVRON,
    "=>": C.RIGHT_EQUALS_ARROW,
    "<=": C.LEFT_EQUALS_ARROW,
    "~>": C.RIGHT_TILDE_ARROW,
    "<~": C.LEFT_TILDE_ARROW,
    "->": C.RIGHT_DASH_ARROW,
    "<-": C.LEFT_DASH_ARROW,
    "+>": C.RIGHT_PLUS_ARROW,
    "<+": C.LEFT_PLUS_ARROW,
    "#:": C.HASH_COLON,
    "##:": C.DOUBLE_HASH_COLON,
    "##::": C.DOUBLE_HASH_DOUBLE_COLON,
    ":>": C.COLON_RIGHT_ANGLE,
    ":>>": C.COLON_DOUBLE_RIGHT_ANGLE,
    "::>>": C.DOUBLE_COLON_DOUBLE_RIGHT_ANGLE,
    "::=": C.DOUBLE_COLON_EQUALS,
    "::>": C.DOUBLE_COLON_RIGHT_ANGLE,
    # compound assigners
    "+=": C.PLUS_EQUALS,
    "-=": C.MINUS_EQUALS,
    "*=": C.TIMES_EQUALS,
    "/=": C.DIVISION_EQUALS,
    "%=": C.PERCENT_EQUALS,
    "??=": C.DOUBLE_QUESTION_EQUALS,
    "!!=": C.DOUBLE_BANG_EQUALS,
    ".=": C.DOT_EQUALS,
    # comparison
    "==": C.DOUBLE_EQUALS,
    ">=": C.GREATER_OR_EQUALS,
    "=<": C.EQUALS_OR_LESS,
    "!=": C.BANG_EQUALS,
    "?=": C.QUESTION_EQUALS,
    "#=": C.HASH_EQUALS,
    "##=": C.DOUBLE_HASH_EQUALS,
    # lookup
    ".": C.DOT,
    "/": C.SLASH,
    "..": C.DOUBLE_DOT,
    "...": C.TRIPLE_DOT,
    ".!": C.DOT_BANG,
    "!.": C.BANG_DOT,
    "?.": C.QUESTION_DOT,
    ".?": C.DOT_QUESTION,
    "..!": C.DOUBLE_DOT_BANG,
    "..?": C.DOUBLE_DOT_QUESTION,
    # tags
    "#": C.HASH,
    "##": C.DOUBLE_HASH,
    ".#": C.DOT_HASH,
    "..#": C.DOUBLE_DOT_HASH,
    # plain operators
    "+": C.PLUS,
    "*": C.STAR,
    "%": C.PERCENT,
    "!": C.BANG,
    "!!": C.DOUBLE_BANG,
    "?": C.QUESTION,
    "??": C.DOUBLE_QUESTION,
    "&": C.AND,
    "|": C.PIPE,
    "^": C.CARET,
    "~": C.TILDE,
    "@": C.AT,
    "$": C.DOLLAR,
    ",": C.COMMA,
    ";": C.SEMICOLON,
}

_MAX_OPERATOR = max(len(symbol) for symbol in OPERATORS)

BRACKETS: dict[str, Category] = {
    "(": C.OPEN_PARENTHESIS,
    ")": C.CLOSE_PARENTHESIS,
    "{": C.OPEN_BRACE,
    "}": C.CLOSE_BRACE,
    "[": C.OPEN_BRACKET,
    "]": C.CLOSE_BRACKET,
}

QUOTES: dict[str, tuple[Category, Category]] = {
    '"': (C.OPEN_DOUBLE_QUOTE, C.CLOSE_DOUBLE_QUOTE),
    "'": (C.OPEN_SINGLE_QUOTE, C.CLOSE_SINGLE_QUOTE),
    "`": (C.OPEN_BACKTICK, C.CLOSE_BACKTICK),
}

# Enclosure opener -> (closing text, closer category)
_CLOSERS: dict[Category, tuple[str, Category]] = {
    opener: (char, closer) for char, (opener, closer) in QUOTES.items()
}
_CLOSERS[C.OPEN_BLOCK_COMMENT] = ("*/", C.CLOSE_BLOCK_COMMENT)

_UNDERSCORES = {
    1: C.UNDERSCORE,
    2: C.DOUBLE_UNDERSCORE,
    3: C.TRIPLE_UNDERSCORE,
}


class _Fatal(Exception):
    """Stops lexing; the error is already recorded."""


class Lexer:
    """Tokenize Astra source text, collecting errors instead of raising them.

    Quotes and block comments are enclosures: inside one, other delimiters
    are still emitted as tokens but only the enclosure's own closer ends it,
    and line comments are not recognized.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []
        self._errors: list[LexError] = []
        self._enclosure: Token | None = None

    def tokenize(self) -> Result:
        """Tokenize the full source and return a Success or a Failure."""
        try:
            while self._pos < len(self._source):
                self._lex_next()
        except _Fatal:
            return self._result()

        if self._enclosure is not None:
            kind = "block comment" if self._enclosure.category is C.OPEN_BLOCK_COMMENT else "quote"
            start = self._enclosure.start
            self._error(f"unterminated {kind}", start, len(self._source) - start)

        self._emit(C.EOF, len(self._source), 0)
        return self._result()

    def _result(self) -> Result:
        tokens = tuple(self._tokens)
        if self._errors:
            return Failure(self._source, tokens, tuple(self._errors))
        return Success(self._source, tokens)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if 0 <= idx < len(self._source):
            return self._source[idx]
        return ""

    def _startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    def _emit(self, category: Category, start: int, length: int) -> Token:
        token = Token(category, start, length)
        self._tokens.append(token)
        self._pos = start + length
        return token

    def _error(self, message: str, offset: int | None = None, length: int = 1) -> LexError:
        if offset is None:
            offset = self._pos
        error = LexError(message, Position.at(self._source, offset), self._source, length)
        logger.debug("lex error: %s", error)
        self._errors.append(error)
        return error

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_next(self) -> None:
        ch = self._peek()

        if ch == "\0":
            self._error("NUL character in source")
            raise _Fatal

        if ch.isspace():
            self._pos += 1
            return

        if self._enclosure is not None and self._lex_enclosure_close():
            return

        if self._enclosure is None and self._lex_comment():
            return

        if self._startswith("/*"):
            token = self._emit(C.OPEN_BLOCK_COMMENT, self._pos, 2)
            self._enter(token)
            return

        if self._startswith("*/"):
            self._emit(C.CLOSE_BLOCK_COMMENT, self._pos, 2)
            return

        if ch == "\\":
            self._lex_escape()
            return

        if ch in QUOTES:
            token = self._emit(QUOTES[ch][0], self._pos, 1)
            self._enter(token)
            return

        if ch in BRACKETS:
            self._emit(BRACKETS[ch], self._pos, 1)
            return

        if ch.isalnum() or ch == "_":
            self._lex_word()
            return

        if self._lex_operator():
            return

        self._error(f"unexpected character {ch!r}")
        self._pos += 1

    def _enter(self, opener: Token) -> None:
        if self._enclosure is None:
            self._enclosure = opener

    def _lex_enclosure_close(self) -> bool:
        assert self._enclosure is not None
        text, closer = _CLOSERS[self._enclosure.category]
        if not self._startswith(text):
            return False
        self._emit(closer, self._pos, len(text))
        self._enclosure = None
        return True

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_comment(self) -> bool:
        if self._startswith("//"):
            self._lex_to_eol(C.EOL_SLASH_COMMENT)
            return True
        if self._startswith("###"):
            self._lex_to_eol(C.DOC_HASH_COMMENT)
            return True
        if self._peek() == "#" and self._peek(1) in (" ", "\t"):
            self._lex_to_eol(C.EOL_HASH_COMMENT)
            return True
        return False

    def _lex_to_eol(self, category: Category) -> None:
        start = self._pos
        end = self._source.find("\n", start)
        if end == -1:
            end = len(self._source)
        # keep a \r of a \r\n line ending out of the comment
        if end > start and self._source[end - 1] == "\r":
            end -= 1
        self._emit(category, start, end - start)

    # ------------------------------------------------------------------
    # Words, numbers, escapes
    # ------------------------------------------------------------------

    def _lex_escape(self) -> None:
        start = self._pos
        if start + 1 >= len(self._source):
            self._error("unexpected end of input after '\\'")
            self._pos += 1
            return
        self._emit(C.ESCAPE, start, 2)

    def _lex_word(self) -> None:
        start = self._pos
        end = start
        source = self._source
        while end < len(source):
            ch = source[end]
            if ch.isalnum() or ch == "_":
                end += 1
            elif (
                ch == "."
                and source[start:end].isdigit()
                and end + 1 < len(source)
                and source[end + 1].isdigit()
            ):
                # decimal point inside a number
                end += 1
            else:
                break

        text = source[start:end]
        self._emit(_classify_word(text), start, end - start)

    # ------------------------------------------------------------------
    # Operators and angle brackets
    # ------------------------------------------------------------------

    def _lex_operator(self) -> bool:
        for length in range(_MAX_OPERATOR, 0, -1):
            symbol = self._source[self._pos : self._pos + length]
            if len(symbol) == length and symbol in OPERATORS:
                category = OPERATORS[symbol]
                if category is C.DOUBLE_COLON_ASSIGNER and self._peek(2).isalpha():
                    category = C.DOUBLE_COLON_PREFIX
                self._emit(category, self._pos, length)
                return True

        ch = self._peek()
        if ch in "<>":
            spaced = self._peek(-1).isspace() and self._peek(1).isspace()
            if ch == "<":
                category = C.LESS_THAN if spaced else C.OPEN_ANGLE
            else:
                category = C.GREATER_THAN if spaced else C.CLOSE_ANGLE
            self._emit(category, self._pos, 1)
            return True

        return False


def _classify_word(text: str) -> Category:
    if set(text) == {"_"}:
        return _UNDERSCORES.get(len(text), C.HYBRID)
    if text[0].isdigit() and text.replace(".", "", 1).isdigit():
        return C.NUMBER
    if text.isalpha():
        return C.WORD
    return C.HYBRID


def tokenize(source: str) -> Result:
    """Convenience function: tokenize source text and return the result."""
    return Lexer(source).tokenize()
