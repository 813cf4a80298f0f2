"""Run command: verify a single file with the driver."""

from __future__ import annotations

import argparse

from rich.markup import escape

from veriharness.cli.context import (
    case_timeout,
    console,
    exit_status,
    load_context,
    report_command_event,
)
from veriharness.runtime.driver import WRAPPERS, DriverInvoker
from veriharness.runtime.profile import RunProfile
from veriharness.toolchain.artifacts import resolve_extern_artifact

WRAPPER_HINTS = {
    "perf": "Now run 'flamegraph-rust-perf > flame.svg'",
    "valgrind": "Now run 'kcachegrind callgrind.out.*'",
}


def cmd_run(args: argparse.Namespace) -> int:
    """Run the driver on one file and return its exit status."""
    context = load_context()
    settings = context.settings
    profile = RunProfile.from_flag(args.release)

    environment = context.compose(profile).with_overrides(RUST_LOG=settings.rust_log)

    if args.build:
        build_status = context.build(environment)
        if build_status != 0:
            return exit_status(build_status)

    extern = resolve_extern_artifact(
        context.paths.deps_dir(profile), settings.extern_crate
    )
    invoker = DriverInvoker(
        driver=context.paths.driver_path(profile, settings.driver_name),
        wrapper=WRAPPERS.get(args.wrapper, ()),
        timeout_seconds=case_timeout(args.timeout_seconds, settings),
        on_event=report_command_event,
    )

    input_file = args.file or settings.run_file
    result = invoker.invoke(environment, extern, input_file, args.driver_args)

    label = escape(str(input_file))
    if result.succeeded:
        console.print(f"[green]✓[/] {label}")
        if args.wrapper:
            console.print(WRAPPER_HINTS[args.wrapper])
    else:
        if result.stderr:
            console.print(result.stderr, markup=False)
        console.print(f"[red]✗[/] {label} (exit {result.exit_code})")
    return exit_status(result.exit_code)
