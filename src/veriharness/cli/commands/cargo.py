"""Cargo command: run a build or test target in the composed environment."""

from __future__ import annotations

import argparse

from veriharness.cli.context import exit_status, load_context
from veriharness.runtime.cargo import CargoInvoker
from veriharness.runtime.profile import RunProfile


def cmd_cargo(args: argparse.Namespace) -> int:
    """Run a cargo target."""
    context = load_context()
    environment = context.compose(RunProfile.from_flag(args.release))
    result = CargoInvoker(context.paths.workspace).run(args.target, environment)
    return exit_status(result.effective_exit_code)
