"""Env command: show the composed environment for a profile."""

from __future__ import annotations

import argparse
import shlex

from veriharness.cli.context import load_context
from veriharness.runtime.profile import RunProfile


def cmd_env(args: argparse.Namespace) -> int:
    """Print the library search path and the variables the harness sets."""
    context = load_context()
    environment = context.compose(RunProfile.from_flag(args.release), base_env={})

    if args.shell:
        for name, value in sorted(environment.env.items()):
            print(f"export {name}={shlex.quote(value)}")
        return 0

    print(f"Profile: {environment.profile.value}")
    print("Library search path:")
    for entry in environment.search_path:
        print(f"  {entry}")
    print(f"Toolchain target libs: {environment.target_lib_dir}")
    print("Environment:")
    for name, value in sorted(environment.env.items()):
        print(f"  {name}={value}")
    return 0
