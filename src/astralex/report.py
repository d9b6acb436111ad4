"""Lex a script and print the code, result status, errors and token listing."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from astralex.colors import ColorSource
from astralex.lexer import tokenize
from astralex.palette import DEFAULT_POLICY, ColorPolicy
from astralex.render import describe, render
from astralex.result import Failure, Result
from astralex.tokens import Token

BORDER = "============================"
DIVIDER = "---"
GUTTER = 8


def print_code_block(
    source: str,
    tokens: Sequence[Token],
    *,
    colorize: bool = True,
    policy: ColorPolicy = DEFAULT_POLICY,
    file: TextIO = sys.stdout,
) -> None:
    """Write *source* inside a left-hand box border, colorized if requested."""
    code = render(source, tokens, policy) if colorize else source
    file.write(f"{'╔':>{GUTTER}}\n")
    for line in code.split("\n"):
        file.write(f"{'║':>{GUTTER}}{line}\n")
    file.write(f"{'╚':>{GUTTER}}\n")


def _bullet(text: str) -> str:
    return f"{'-':>{GUTTER}} {text}"


def print_result(
    result: Result,
    *,
    colorize: bool = True,
    policy: ColorPolicy = DEFAULT_POLICY,
    colors: ColorSource | None = None,
    filename: str = "<input>",
    file: TextIO = sys.stdout,
) -> None:
    """Write the full report for an already-lexed *result*."""
    tokens = result.tokens

    file.write("\n")
    file.write(f"{BORDER}\n")

    file.write("Code:\n")
    print_code_block(result.source, tokens, colorize=colorize, policy=policy, file=file)
    file.write(f"{DIVIDER}\n")

    file.write(f"Result: {'SUCCESS' if result.is_success else 'FAILURE'}\n")

    if isinstance(result, Failure):
        file.write(f"{DIVIDER}\n")
        file.write("Errors:\n")
        for error in result.errors:
            file.write(_bullet(str(error)) + "\n")
            for line in error.format(filename).splitlines()[1:]:
                file.write(f"{'':>{GUTTER + 2}}{line}\n")
        file.write("\n")

    file.write(f"{DIVIDER}\n")
    file.write("Tokens:\n")
    for line in describe(tokens, result.source, colorize=colorize, policy=policy, colors=colors):
        file.write(_bullet(line) + "\n")

    file.write(f"{BORDER}\n")
    file.write("\n")


def run(
    source: str,
    *,
    colorize: bool = True,
    policy: ColorPolicy = DEFAULT_POLICY,
    colors: ColorSource | None = None,
    filename: str = "<input>",
    file: TextIO = sys.stdout,
) -> Result:
    """Lex *source*, write the report, and return the lexer result."""
    result = tokenize(source)
    print_result(
        result,
        colorize=colorize,
        policy=policy,
        colors=colors,
        filename=filename,
        file=file,
    )
    return result
