"""Single-attempt subprocess execution with an optional timeout.

A command runs once with its streams inherited, or captured on request.
When a timeout applies the caller is notified at the policy's warning
threshold; at the limit the child receives SIGTERM, then SIGKILL once the
terminate grace period has passed. The child stays in the harness's
process group, so a terminal interrupt reaches both.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from veriharness.runtime.timeout_policy import (
    TimeoutDomain,
    TimeoutPolicyRegistry,
    get_timeout_policy_registry,
)

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


class CommandEventType(str, Enum):
    """Timeout milestones reported while a command runs."""

    WARNING = "warning"
    TERMINATE = "terminate"
    KILL = "kill"


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """Notice that a running command crossed a timeout milestone."""

    event_type: CommandEventType
    domain: TimeoutDomain
    command: str
    timeout_seconds: float | None


EventCallback = Callable[[CommandEvent], None]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of running one command to completion.

    ``stdout``/``stderr`` are empty unless output capture was requested;
    otherwise the child wrote straight to the inherited streams.
    """

    domain: TimeoutDomain
    command: str
    exit_code: int | None
    duration_seconds: float
    timeout_seconds: float | None = None
    timed_out: bool = False
    stdout: str = ""
    stderr: str = ""

    @property
    def effective_exit_code(self) -> int:
        if self.timed_out:
            return TIMEOUT_EXIT_CODE
        if self.exit_code is not None:
            return self.exit_code
        return 1


class CommandRunner:
    """Runs commands once under their domain's timeout policy."""

    def __init__(
        self,
        *,
        policy_registry: TimeoutPolicyRegistry | None = None,
    ) -> None:
        self._policy_registry = policy_registry or get_timeout_policy_registry()

    def run(
        self,
        *,
        command: Sequence[str],
        domain: TimeoutDomain,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        capture_output: bool = False,
        requested_timeout_seconds: float | None = None,
        on_event: EventCallback | None = None,
    ) -> CommandResult:
        """Run a command to completion.

        Raises:
            OSError: The command could not be launched.
        """
        registry = self._policy_registry
        grace_seconds = registry.policy_for(domain).signal.terminate_grace_seconds
        timeout_seconds = registry.timeout_for(domain, requested_timeout_seconds)
        warning_after = registry.warning_after_seconds(domain, timeout_seconds)
        command_text = shlex.join(str(part) for part in command)

        def notify(event_type: CommandEventType) -> None:
            if on_event is not None:
                on_event(
                    CommandEvent(event_type, domain, command_text, timeout_seconds)
                )

        logger.info("Running: %s", command_text)
        started_at = time.perf_counter()
        stream = subprocess.PIPE if capture_output else None
        process = subprocess.Popen(
            list(command),
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            stdout=stream,
            stderr=stream,
            text=True,
        )

        try:
            stdout, stderr, timed_out = _wait(
                process, timeout_seconds, warning_after, grace_seconds, notify
            )
        except KeyboardInterrupt:
            logger.warning("Interrupted while running: %s", command_text)
            _stop_after_interrupt(process, grace_seconds)
            raise

        duration_seconds = time.perf_counter() - started_at
        logger.info(
            "Finished (exit %s, %.1fs): %s",
            process.returncode,
            duration_seconds,
            command_text,
        )
        return CommandResult(
            domain=domain,
            command=command_text,
            exit_code=process.returncode,
            duration_seconds=duration_seconds,
            timeout_seconds=timeout_seconds,
            timed_out=timed_out,
            stdout=stdout,
            stderr=stderr,
        )


def _wait(
    process: subprocess.Popen[str],
    timeout_seconds: float | None,
    warning_after: float | None,
    grace_seconds: float,
    notify: Callable[[CommandEventType], None],
) -> tuple[str, str, bool]:
    """Wait for the child; returns ``(stdout, stderr, timed_out)``.

    communicate() keeps output buffered across timeouts, so the final call
    returns everything the child wrote.
    """
    remaining = timeout_seconds
    if warning_after is not None and timeout_seconds is not None:
        try:
            out, err = process.communicate(timeout=warning_after)
            return out or "", err or "", False
        except subprocess.TimeoutExpired:
            logger.warning(
                "Approaching %ss timeout: pid %s", timeout_seconds, process.pid
            )
            notify(CommandEventType.WARNING)
        remaining = max(0.001, timeout_seconds - warning_after)

    try:
        out, err = process.communicate(timeout=remaining)
        return out or "", err or "", False
    except subprocess.TimeoutExpired:
        logger.warning("Timed out after %ss: pid %s", timeout_seconds, process.pid)

    if process.poll() is None:
        process.terminate()
        notify(CommandEventType.TERMINATE)
    try:
        out, err = process.communicate(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        process.kill()
        notify(CommandEventType.KILL)
        out, err = process.communicate()
    return out or "", err or "", True


def _stop_after_interrupt(
    process: subprocess.Popen[str], grace_seconds: float
) -> None:
    """Give an interrupted child the grace period to exit, then stop it."""
    try:
        process.communicate(timeout=grace_seconds)
        return
    except subprocess.TimeoutExpired:
        process.terminate()
    try:
        process.communicate(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        process.kill()
        process.communicate()


_DEFAULT_COMMAND_RUNNER = CommandRunner()


def get_command_runner() -> CommandRunner:
    """Return shared command runner instance."""
    return _DEFAULT_COMMAND_RUNNER
