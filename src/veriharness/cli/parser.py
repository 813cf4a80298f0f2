"""Argument parser construction for the harness CLI."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from pathlib import Path

from veriharness.runtime.cargo import CARGO_TARGETS
from veriharness.runtime.driver import WRAPPERS


def positive_seconds(value: str) -> float:
    """argparse type for a strictly positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        message = f"invalid number of seconds: {value!r}"
        raise argparse.ArgumentTypeError(message) from None
    if not (math.isfinite(seconds) and seconds > 0):
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return seconds


def _add_profile_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--release",
        action="store_true",
        help="Use the release build outputs (default: debug)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="veriharness - run the verifier driver with a pinned toolchain"
    )
    parser.add_argument(
        "--workdir",
        "-w",
        type=Path,
        help="Verifier checkout to operate on (default: current directory)",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Env command
    env_parser = subparsers.add_parser(
        "env",
        help="Show the composed library search path and environment",
    )
    _add_profile_flag(env_parser)
    env_parser.add_argument(
        "--shell",
        action="store_true",
        help="Print as shell export statements",
    )

    # Run command (single file)
    run_parser = subparsers.add_parser(
        "run",
        help="Run the driver on a single file",
    )
    run_parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Input file (default: $RUN_FILE or the configured run_file)",
    )
    run_parser.add_argument(
        "driver_args",
        nargs="*",
        help="Extra driver arguments (after --)",
    )
    _add_profile_flag(run_parser)
    run_parser.add_argument(
        "--build",
        action="store_true",
        help="Run cargo build for the profile first",
    )
    run_parser.add_argument(
        "--wrapper",
        choices=sorted(WRAPPERS),
        help="Run the driver under a profiler",
    )
    run_parser.add_argument(
        "--timeout-seconds",
        type=positive_seconds,
        help="Stop the driver after this many seconds (default: no limit)",
    )

    # Suite command (bulk, fail-fast)
    suite_parser = subparsers.add_parser(
        "suite",
        help="Run the driver over a corpus, stopping at the first failure",
    )
    suite_parser.add_argument(
        "corpus",
        nargs="?",
        type=Path,
        help="Corpus directory (default: the long-pass corpus)",
    )
    _add_profile_flag(suite_parser)
    suite_parser.add_argument(
        "--overflow",
        action="store_true",
        help="Check binary operations for overflow (long-pass-overflow corpus)",
    )
    suite_parser.add_argument(
        "--build",
        action="store_true",
        help="Run cargo build for the profile first",
    )
    suite_parser.add_argument(
        "--timeout-seconds",
        type=positive_seconds,
        help="Per-case timeout in seconds (default: no limit)",
    )
    suite_parser.add_argument(
        "--capture",
        action="store_true",
        help="Capture driver output and show it only for the failing case",
    )
    suite_parser.add_argument(
        "--timings",
        type=Path,
        help="Timing log to append to (default: ./timings)",
    )

    # Cargo command
    cargo_parser = subparsers.add_parser(
        "cargo",
        help="Run a cargo target inside the composed environment",
    )
    cargo_parser.add_argument(
        "target",
        choices=sorted(CARGO_TARGETS),
        help="Cargo target to run",
    )
    _add_profile_flag(cargo_parser)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
