"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from rich.console import Console

from veriharness.config.paths import HarnessPaths, get_paths
from veriharness.config.settings import HarnessSettings, load_settings
from veriharness.runtime.cargo import CargoInvoker
from veriharness.runtime.command_runner import CommandEvent, CommandEventType
from veriharness.runtime.environment import ComposedEnvironment, compose_for_workspace
from veriharness.runtime.profile import RunProfile

logger = logging.getLogger(__name__)

# Progress goes to stderr; stdout belongs to the driver.
console = Console(stderr=True, highlight=False)


@dataclass(frozen=True, slots=True)
class HarnessContext:
    """Paths and settings for one CLI invocation."""

    paths: HarnessPaths
    settings: HarnessSettings

    def compose(
        self,
        profile: RunProfile,
        base_env: Mapping[str, str] | None = None,
    ) -> ComposedEnvironment:
        return compose_for_workspace(
            self.paths,
            self.settings,
            profile,
            base_env=os.environ if base_env is None else base_env,
        )

    def build(self, environment: ComposedEnvironment) -> int:
        """Run ``cargo build`` for the environment's profile."""
        console.print(f"Building ({environment.profile.value})...")
        result = CargoInvoker(self.paths.workspace).run("build", environment)
        if result.effective_exit_code != 0:
            code = result.effective_exit_code
            console.print(f"[red]✗ cargo build failed ({code})[/]")
        return result.effective_exit_code


def report_command_event(event: CommandEvent) -> None:
    """Print a timeout milestone for a running driver."""
    limit = (
        f"{event.timeout_seconds:g}s" if event.timeout_seconds is not None else "time"
    )
    if event.event_type == CommandEventType.WARNING:
        console.print(f"  [yellow]![/] still running, nearing the {limit} limit")
    elif event.event_type == CommandEventType.TERMINATE:
        console.print(f"  [red]![/] timed out after {limit}, sending SIGTERM")
    elif event.event_type == CommandEventType.KILL:
        console.print("  [red]![/] still running after grace period, sending SIGKILL")


def case_timeout(
    requested_seconds: float | None, settings: HarnessSettings
) -> float | None:
    """Pick the per-run timeout: command line first, then settings."""
    if requested_seconds is not None:
        return requested_seconds
    return settings.case_timeout_seconds


def load_context() -> HarnessContext:
    """Resolve paths and settings for the current working directory."""
    paths = get_paths()
    return HarnessContext(paths=paths, settings=load_settings(paths))


def exit_status(code: int) -> int:
    """Map a child exit code (negative when signalled) to our exit status."""
    if code == 0:
        return 0
    return code if 0 < code < 256 else 1
