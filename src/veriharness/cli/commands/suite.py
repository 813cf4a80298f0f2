"""Suite command: fail-fast regression/performance run over a corpus."""

from __future__ import annotations

import argparse
import sys

from rich.markup import escape

from veriharness.cli.context import (
    case_timeout,
    console,
    load_context,
    report_command_event,
)
from veriharness.runtime.driver import DriverInvoker
from veriharness.runtime.profile import RunProfile
from veriharness.runtime.timeout_policy import TimeoutDomain
from veriharness.suite.discovery import (
    LONG_PASS_CORPUS,
    LONG_PASS_OVERFLOW_CORPUS,
    TestCase,
)
from veriharness.suite.runner import CaseOutcome, SuiteRunner
from veriharness.suite.timing_log import TimingLog
from veriharness.toolchain.artifacts import resolve_extern_artifact


def _announce(case: TestCase) -> None:
    console.print(f"Testing '{case.label}'...", markup=False)


def _report(outcome: CaseOutcome) -> None:
    seconds = outcome.record.elapsed_seconds
    if outcome.succeeded:
        console.print(f"  [green]✓[/] {seconds}s")
    else:
        console.print(f"  [red]✗[/] exit {outcome.result.exit_code} after {seconds}s")


def cmd_suite(args: argparse.Namespace) -> int:
    """Run every case in the corpus, stopping at the first failure."""
    context = load_context()
    settings = context.settings
    profile = RunProfile.from_flag(args.release)

    corpus = args.corpus or (
        LONG_PASS_OVERFLOW_CORPUS if args.overflow else LONG_PASS_CORPUS
    )
    overrides = {"RUST_BACKTRACE": "1"}
    if args.overflow:
        overrides["PRUSTI_CHECK_BINARY_OPERATIONS"] = "1"
    environment = context.compose(profile).with_overrides(**overrides)

    if args.build:
        build_status = context.build(environment)
        if build_status != 0:
            return 1

    extern = resolve_extern_artifact(
        context.paths.deps_dir(profile), settings.extern_crate
    )
    timings_path = args.timings or settings.timings_log or context.paths.timings_log

    runner = SuiteRunner(
        invoker=DriverInvoker(
            driver=context.paths.driver_path(profile, settings.driver_name),
            capture_output=args.capture,
            timeout_seconds=case_timeout(args.timeout_seconds, settings),
            domain=TimeoutDomain.SUITE_CASE,
            on_event=report_command_event,
        ),
        timing_log=TimingLog(timings_path),
        extension=settings.source_extension,
        on_case_start=_announce,
        on_case_end=_report,
    )
    result = runner.run_suite(corpus, environment, extern)

    if result.succeeded:
        console.print(
            f"[green]Suite completed:[/] {len(result.records)} case(s), "
            f"timings appended to {escape(str(timings_path))}"
        )
        return 0

    failure = result.failure
    if failure is not None:
        if failure.stdout:
            sys.stdout.write(failure.stdout)
        if failure.stderr:
            sys.stderr.write(failure.stderr)
    console.print(f"[red]Suite aborted[/] after {len(result.records)} case(s)")
    result.raise_for_status()
    return 1
