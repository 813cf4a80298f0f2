"""Invocation of the external verifier driver."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from veriharness.runtime.command_runner import (
    CommandEvent,
    CommandRunner,
    get_command_runner,
)
from veriharness.runtime.environment import ComposedEnvironment
from veriharness.runtime.timeout_policy import TimeoutDomain
from veriharness.toolchain.artifacts import ExternArtifact

logger = logging.getLogger(__name__)

LAUNCH_FAILURE_EXIT_CODE = 127

# Profiler prefixes for flamegraph and callgrind runs
WRAPPERS: dict[str, tuple[str, ...]] = {
    "perf": ("perf", "record", "-F", "99", "--call-graph=dwarf,32000"),
    "valgrind": (
        "valgrind",
        "--tool=callgrind",
        "--vex-iropt-register-updates=allregs-at-mem-access",
    ),
}


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one driver invocation."""

    input_file: Path
    exit_code: int
    command: str = ""
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def build_driver_command(
    driver: Path,
    target_lib_dir: Path,
    extern: ExternArtifact,
    input_file: Path,
    extra_args: Sequence[str] = (),
    *,
    wrapper: Sequence[str] = (),
) -> list[str]:
    """Build ``<driver> -L <lib> --extern <name>=<path> <input> [extra...]``."""
    return [
        *wrapper,
        str(driver),
        "-L",
        str(target_lib_dir),
        "--extern",
        extern.as_argument(),
        str(input_file),
        *extra_args,
    ]


@dataclass(slots=True)
class DriverInvoker:
    """Launches the verifier driver with a composed environment.

    Streams are inherited unless ``capture_output`` is set. A non-zero exit
    is a legitimate verification result and is returned, not retried.
    """

    driver: Path
    wrapper: tuple[str, ...] = ()
    capture_output: bool = False
    timeout_seconds: float | None = None
    domain: TimeoutDomain = TimeoutDomain.DRIVER_RUN
    runner: CommandRunner = field(default_factory=get_command_runner)
    on_event: Callable[[CommandEvent], None] | None = None

    def invoke(
        self,
        environment: ComposedEnvironment,
        extern: ExternArtifact,
        input_file: Path,
        extra_args: Sequence[str] = (),
    ) -> RunResult:
        """Run the driver on one input file and return its exit status."""
        command = build_driver_command(
            self.driver,
            environment.target_lib_dir,
            extern,
            input_file,
            extra_args,
            wrapper=self.wrapper,
        )

        try:
            result = self.runner.run(
                command=command,
                domain=self.domain,
                env=environment.env,
                capture_output=self.capture_output,
                requested_timeout_seconds=self.timeout_seconds,
                on_event=self.on_event,
            )
        except OSError as exc:
            logger.error("Failed to launch driver %s: %s", command[0], exc)
            return RunResult(
                input_file=input_file,
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
                command=" ".join(command),
                stderr=f"failed to launch {command[0]}: {exc}",
            )

        if result.effective_exit_code != 0:
            logger.warning(
                "Driver exited with %s on %s",
                result.effective_exit_code,
                input_file,
            )

        return RunResult(
            input_file=input_file,
            exit_code=result.effective_exit_code,
            command=result.command,
            stdout=result.stdout,
            stderr=result.stderr,
            timed_out=result.timed_out,
        )
