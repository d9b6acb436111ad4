"""Interactive multi-line input loop feeding scripts to the lexer report."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.output import Output

logger = logging.getLogger(__name__)

PROMPT = "0> "


class Session(Protocol):
    def prompt(self, message: str) -> str: ...


def build_key_bindings() -> KeyBindings:
    """Enter submits, Alt+Enter inserts a newline, Escape exits."""
    bindings = KeyBindings()

    @bindings.add("enter")
    def _submit(event: KeyPressEvent) -> None:
        event.current_buffer.validate_and_handle()

    @bindings.add("escape", "enter")
    def _newline(event: KeyPressEvent) -> None:
        event.current_buffer.insert_text("\n")

    @bindings.add("escape")
    def _exit(event: KeyPressEvent) -> None:
        event.app.exit(exception=EOFError)

    return bindings


def continuation(width: int, line_number: int, is_soft_wrap: bool) -> str:
    """Number continuation lines like the first: ``1> ``, ``2> ``..."""
    if is_soft_wrap:
        return " " * width
    return f"{line_number}> ".rjust(width)


def create_session(
    input: Input | None = None, output: Output | None = None
) -> PromptSession[str]:
    """Multi-line session; *input* and *output* default to the terminal."""
    return PromptSession(
        multiline=True,
        key_bindings=build_key_bindings(),
        prompt_continuation=continuation,
        history=InMemoryHistory(),
        input=input,
        output=output,
    )


def input_loop(run: Callable[[str], object], session: Session | None = None) -> list[str]:
    """Prompt for scripts until Escape, Ctrl+D or Ctrl+C; return the history.

    Each non-empty script is passed to *run*.
    """
    if session is None:
        session = create_session()
    history: list[str] = []

    while True:
        try:
            script = session.prompt(PROMPT)
        except (EOFError, KeyboardInterrupt):
            logger.debug("input loop closed after %d scripts", len(history))
            break
        if not script:
            continue
        run(script)
        history.append(script)

    return history
