"""CLI orchestration and command routing."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.markup import escape

from veriharness.cli.commands import cmd_cargo, cmd_env, cmd_run, cmd_suite
from veriharness.cli.context import console
from veriharness.cli.parser import build_parser, parse_args
from veriharness.errors import HarnessError

logger = logging.getLogger(__name__)


def dispatch(args: argparse.Namespace) -> int:
    """Route parsed args to the correct command handler."""
    command_handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "env": cmd_env,
        "run": cmd_run,
        "suite": cmd_suite,
        "cargo": cmd_cargo,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        build_parser().print_help()
        return 2

    try:
        return handler(args)
    except HarnessError as exc:
        logger.error("%s failed: %s", args.command, exc)
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute command."""
    args = parse_args(argv)

    if args.workdir:
        workdir = args.workdir.resolve()
        os.chdir(workdir)

    if configure_logging is not None:
        configure_logging()

    logger.info("Working directory: %s", Path.cwd())
    return dispatch(args)
