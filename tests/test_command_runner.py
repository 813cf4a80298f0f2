"""Tests for the shared command runner."""

from __future__ import annotations

import sys
from sys import executable

import pytest

from veriharness.runtime.command_runner import (
    TIMEOUT_EXIT_CODE,
    CommandEvent,
    CommandEventType,
    CommandRunner,
)
from veriharness.runtime.timeout_policy import (
    SignalPolicy,
    TimeoutDomain,
    TimeoutPolicy,
    TimeoutPolicyRegistry,
)


def _make_runner(
    *,
    warning_fraction: float = 0.0,
    min_timeout_seconds: float = 0.01,
) -> CommandRunner:
    policy = TimeoutPolicy(
        domain=TimeoutDomain.SUITE_CASE,
        default_timeout_seconds=None,
        min_timeout_seconds=min_timeout_seconds,
        max_timeout_seconds=None,
        signal=SignalPolicy(
            warning_fraction=warning_fraction, terminate_grace_seconds=0.05
        ),
    )
    return CommandRunner(
        policy_registry=TimeoutPolicyRegistry(policies={policy.domain: policy})
    )


def test_command_runner_reports_exit_status() -> None:
    result = _make_runner().run(
        command=[executable, "-c", "import sys; sys.exit(3)"],
        domain=TimeoutDomain.SUITE_CASE,
    )

    assert result.exit_code == 3
    assert result.effective_exit_code == 3
    assert not result.timed_out
    assert result.timeout_seconds is None


def test_command_runner_captures_output_on_request() -> None:
    result = _make_runner().run(
        command=[
            executable,
            "-c",
            "import sys; print('out'); print('err', file=sys.stderr)",
        ],
        domain=TimeoutDomain.SUITE_CASE,
        capture_output=True,
    )

    assert result.effective_exit_code == 0
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


def test_command_runner_inherits_streams_by_default(
    capfd: pytest.CaptureFixture[str],
) -> None:
    result = _make_runner().run(
        command=[executable, "-c", "print('streamed')"],
        domain=TimeoutDomain.SUITE_CASE,
    )

    assert result.stdout == ""
    assert "streamed" in capfd.readouterr().out


def test_command_runner_passes_environment() -> None:
    result = _make_runner().run(
        command=[executable, "-c", "import os; print(os.environ['JAVA_HOME'])"],
        domain=TimeoutDomain.SUITE_CASE,
        env={"JAVA_HOME": "/opt/jvm"},
        capture_output=True,
    )

    assert result.stdout.strip() == "/opt/jvm"


def test_command_runner_stops_command_after_requested_timeout() -> None:
    events: list[CommandEvent] = []
    result = _make_runner().run(
        command=[executable, "-c", "import time; time.sleep(5)"],
        domain=TimeoutDomain.SUITE_CASE,
        requested_timeout_seconds=0.2,
        on_event=events.append,
    )

    assert result.timed_out
    assert result.effective_exit_code == TIMEOUT_EXIT_CODE
    assert [event.event_type for event in events] == [CommandEventType.TERMINATE]
    assert events[0].timeout_seconds == 0.2


def test_command_runner_no_warning_well_within_timeout() -> None:
    events: list[CommandEvent] = []
    result = _make_runner(warning_fraction=0.5).run(
        command=[executable, "-c", "pass"],
        domain=TimeoutDomain.SUITE_CASE,
        requested_timeout_seconds=30.0,
        on_event=events.append,
    )

    assert not result.timed_out
    assert events == []


def test_command_runner_emits_warning_before_timeout() -> None:
    events: list[CommandEvent] = []
    result = _make_runner(warning_fraction=0.1).run(
        command=[executable, "-c", "import time; time.sleep(1.0)"],
        domain=TimeoutDomain.SUITE_CASE,
        requested_timeout_seconds=5.0,
        on_event=events.append,
    )

    assert not result.timed_out
    assert result.effective_exit_code == 0
    assert [event.event_type for event in events] == [CommandEventType.WARNING]


def test_command_runner_keeps_output_written_before_timeout() -> None:
    result = _make_runner().run(
        command=[
            executable,
            "-c",
            "import time; print('partial', flush=True); time.sleep(5)",
        ],
        domain=TimeoutDomain.SUITE_CASE,
        capture_output=True,
        requested_timeout_seconds=1.0,
    )

    assert result.timed_out
    assert "partial" in result.stdout


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_command_runner_kills_child_that_ignores_sigterm() -> None:
    events: list[CommandEvent] = []
    script = (
        "import signal, time; "
        "signal.signal(signal.SIGTERM, signal.SIG_IGN); "
        "time.sleep(5)"
    )
    result = _make_runner().run(
        command=[executable, "-c", script],
        domain=TimeoutDomain.SUITE_CASE,
        requested_timeout_seconds=1.0,
        on_event=events.append,
    )

    assert result.timed_out
    assert result.exit_code is not None and result.exit_code < 0
    assert [event.event_type for event in events] == [
        CommandEventType.TERMINATE,
        CommandEventType.KILL,
    ]
