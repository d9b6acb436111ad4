"""Token categories, roles, and the token record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Role(Enum):
    OPENER = auto()  # introduces a scope
    CLOSER = auto()  # ends a scope
    PLAIN = auto()


class Category(Enum):
    # Words
    WORD = auto()  # letters
    HYBRID = auto()  # letters, digits and underscores mixed
    NUMBER = auto()  # digits, optionally with a decimal point
    ESCAPE = auto()  # \ followed by any character
    UNDERSCORE = auto()  # _
    DOUBLE_UNDERSCORE = auto()  # __
    TRIPLE_UNDERSCORE = auto()  # ___

    # Comments
    OPEN_BLOCK_COMMENT = auto()  # /*
    CLOSE_BLOCK_COMMENT = auto()  # */
    DOC_HASH_COMMENT = auto()  # ### to end of line
    EOL_HASH_COMMENT = auto()  # "# " to end of line
    EOL_SLASH_COMMENT = auto()  # // to end of line

    # Brackets
    OPEN_PARENTHESIS = auto()  # (
    CLOSE_PARENTHESIS = auto()  # )
    OPEN_BRACE = auto()  # {
    CLOSE_BRACE = auto()  # }
    OPEN_BRACKET = auto()  # [
    CLOSE_BRACKET = auto()  # ]
    OPEN_ANGLE = auto()  # <
    CLOSE_ANGLE = auto()  # >

    # Quotes
    OPEN_DOUBLE_QUOTE = auto()  # "
    CLOSE_DOUBLE_QUOTE = auto()  # "
    OPEN_SINGLE_QUOTE = auto()  # '
    CLOSE_SINGLE_QUOTE = auto()  # '
    OPEN_BACKTICK = auto()  # `
    CLOSE_BACKTICK = auto()  # `

    # Assigners
    DOUBLE_RIGHT_ANGLE = auto()  # >>
    DOUBLE_LEFT_ANGLE = auto()  # <<
    EQUALS = auto()  # =
    DASH = auto()  # -
    COLON_ASSIGNER = auto()  # :
    DOUBLE_COLON_ASSIGNER = auto()  # ::
    TRIPLE_COLON_ASSIGNER = auto()  # :::
    RIGHT_CHEVRON = auto()  # >>>
    LEFT_CHEVRON = auto()  # <<<
    RIGHT_EQUALS_ARROW = auto()  # =>
    LEFT_EQUALS_ARROW = auto()  # <=
    RIGHT_TILDE_ARROW = auto()  # ~>
    LEFT_TILDE_ARROW = auto()  # <~
    RIGHT_DASH_ARROW = auto()  # ->
    LEFT_DASH_ARROW = auto()  # <-
    RIGHT_PLUS_ARROW = auto()  # +>
    LEFT_PLUS_ARROW = auto()  # <+
    HASH_COLON = auto()  # #:
    DOUBLE_HASH_COLON = auto()  # ##:
    DOUBLE_HASH_DOUBLE_COLON = auto()  # ##::
    COLON_RIGHT_ANGLE = auto()  # :>
    COLON_DOUBLE_RIGHT_ANGLE = auto()  # :>>
    DOUBLE_COLON_DOUBLE_RIGHT_ANGLE = auto()  # ::>>
    DOUBLE_COLON_EQUALS = auto()  # ::=
    DOUBLE_COLON_RIGHT_ANGLE = auto()  # ::>

    # Compound assigners
    PLUS_EQUALS = auto()  # +=
    MINUS_EQUALS = auto()  # -=
    TIMES_EQUALS = auto()  # *=
    DIVISION_EQUALS = auto()  # /=
    PERCENT_EQUALS = auto()  # %=
    DOUBLE_QUESTION_EQUALS = auto()  # ??=
    DOUBLE_BANG_EQUALS = auto()  # !!=
    DOT_EQUALS = auto()  # .=

    # Comparison
    DOUBLE_EQUALS = auto()  # ==
    GREATER_OR_EQUALS = auto()  # >=
    EQUALS_OR_LESS = auto()  # =<
    GREATER_THAN = auto()  # > with whitespace on both sides
    LESS_THAN = auto()  # < with whitespace on both sides
    BANG_EQUALS = auto()  # !=
    QUESTION_EQUALS = auto()  # ?=
    HASH_EQUALS = auto()  # #=
    DOUBLE_HASH_EQUALS = auto()  # ##=

    # Lookup
    DOT = auto()  # .
    SLASH = auto()  # /
    DOUBLE_DOT = auto()  # ..
    TRIPLE_DOT = auto()  # ...
    DOUBLE_COLON_PREFIX = auto()  # :: directly before a word
    DOT_BANG = auto()  # .!
    BANG_DOT = auto()  # !.
    QUESTION_DOT = auto()  # ?.
    DOT_QUESTION = auto()  # .?
    DOUBLE_DOT_BANG = auto()  # ..!
    DOUBLE_DOT_QUESTION = auto()  # ..?

    # Tags
    HASH = auto()  # #
    DOUBLE_HASH = auto()  # ##
    DOT_HASH = auto()  # .#
    DOUBLE_DOT_HASH = auto()  # ..#

    # Operators (no explicit color)
    PLUS = auto()  # +
    STAR = auto()  # *
    PERCENT = auto()  # %
    BANG = auto()  # !
    DOUBLE_BANG = auto()  # !!
    QUESTION = auto()  # ?
    DOUBLE_QUESTION = auto()  # ??
    AND = auto()  # &
    PIPE = auto()  # |
    CARET = auto()  # ^
    TILDE = auto()  # ~
    AT = auto()  # @
    DOLLAR = auto()  # $
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;

    EOF = auto()

    @property
    def role(self) -> Role:
        return _ROLES.get(self, Role.PLAIN)


_ROLES: dict[Category, Role] = {
    Category.OPEN_PARENTHESIS: Role.OPENER,
    Category.OPEN_BRACE: Role.OPENER,
    Category.OPEN_BRACKET: Role.OPENER,
    Category.OPEN_ANGLE: Role.OPENER,
    Category.OPEN_DOUBLE_QUOTE: Role.OPENER,
    Category.OPEN_SINGLE_QUOTE: Role.OPENER,
    Category.OPEN_BACKTICK: Role.OPENER,
    Category.OPEN_BLOCK_COMMENT: Role.OPENER,
    Category.CLOSE_PARENTHESIS: Role.CLOSER,
    Category.CLOSE_BRACE: Role.CLOSER,
    Category.CLOSE_BRACKET: Role.CLOSER,
    Category.CLOSE_ANGLE: Role.CLOSER,
    Category.CLOSE_DOUBLE_QUOTE: Role.CLOSER,
    Category.CLOSE_SINGLE_QUOTE: Role.CLOSER,
    Category.CLOSE_BACKTICK: Role.CLOSER,
    Category.CLOSE_BLOCK_COMMENT: Role.CLOSER,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int

    @classmethod
    def at(cls, source: str, offset: int) -> Position:
        """Compute the line and column of *offset* within *source*."""
        line = source.count("\n", 0, offset) + 1
        column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(line, column, offset)


@dataclass(frozen=True, slots=True)
class Token:
    """A lexer token: a category over a slice of the source text."""

    category: Category
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def role(self) -> Role:
        return self.category.role

    def text(self, source: str) -> str:
        return source[self.start : self.end]

    def describe(self, source: str) -> str:
        """One-line label used by the token listing."""
        return f"{self.category.name} [{self.start}:{self.end}] {self.text(source)!r}"
