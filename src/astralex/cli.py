"""Command-line interface for the Astra lexer."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from astralex.colors import RGB
from astralex.errors import ConfigError
from astralex.tokens import Category

logger = logging.getLogger(__name__)

CONFIG_NAME = "axa.toml"

DESCRIPTION = """\
Astra Lexer CLI: a command line interface for lexing the Astra programming language.

Without a script, an interactive input loop reads scripts from the console.
"""

EPILOG = """\
keys (input loop only):
  Enter        lex the current script
  Alt+Enter    insert a new line into the current script
  Up           recall the previous script
  Esc, Ctrl+D  exit the input loop (Ctrl+C also exits)
"""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    script: Path | None
    colorize: bool
    seed: int | None
    colors: dict[Category, RGB] = field(default_factory=dict)
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="axa",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "script",
        nargs="?",
        help="Script file to lex (default: start the interactive input loop)",
    )
    p.add_argument(
        "-p",
        "--plain",
        action="store_true",
        default=None,
        help="Do not colorize the output",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="N",
        help="Seed for the nesting depth colors of the token listing",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        if config_path is not None:
            raise ConfigError(f"config file not found: {path}")
        return {}

    logger.debug("loading config from %s", path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    from astralex.palette import parse_overrides

    script = Path(args.script) if args.script else None
    search_dir = script.parent if script is not None else Path(".")
    if not search_dir.parts:
        search_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    # Plain output: config < CLI
    plain = config.get("plain", False)
    if not isinstance(plain, bool):
        raise ConfigError(f"'plain' must be true or false, got {plain!r}")
    if args.plain is not None:
        plain = args.plain

    # Depth color seed: config < CLI
    seed = config.get("seed")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigError(f"'seed' must be an integer, got {seed!r}")
    if args.seed is not None:
        seed = args.seed

    # Color overrides: config only
    colors: dict[Category, RGB] = {}
    cfg_colors = config.get("colors")
    if cfg_colors is not None:
        if not isinstance(cfg_colors, dict):
            raise ConfigError("'colors' must be a table of CATEGORY = color")
        colors = parse_overrides(cfg_colors)

    return CliOptions(
        script=script,
        colorize=not plain,
        seed=seed,
        colors=colors,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from astralex.colors import RandomColors
    from astralex.console import input_loop
    from astralex.log import setup_logging
    from astralex.palette import DEFAULT_POLICY
    from astralex.report import run

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    policy = DEFAULT_POLICY.with_overrides(options.colors)
    colors = RandomColors.seeded(options.seed) if options.seed is not None else RandomColors()

    if options.script is None:
        input_loop(
            lambda script: run(
                script,
                colorize=options.colorize,
                policy=policy,
                colors=colors,
                file=sys.stdout,
            )
        )
        return 0

    try:
        source = options.script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.script}: {exc}", file=sys.stderr)
        return 1

    run(
        source,
        colorize=options.colorize,
        policy=policy,
        colors=colors,
        filename=str(options.script),
        file=sys.stdout,
    )
    return 0
