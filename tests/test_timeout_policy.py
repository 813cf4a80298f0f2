"""Tests for timeout policy resolution."""

import logging

import pytest

from veriharness.runtime.timeout_policy import (
    SignalPolicy,
    TimeoutDomain,
    TimeoutPolicy,
    TimeoutPolicyRegistry,
    get_timeout_policy_registry,
)


def test_timeouts_are_off_by_default() -> None:
    registry = get_timeout_policy_registry()

    for domain in TimeoutDomain:
        assert registry.timeout_for(domain) is None
        assert registry.warning_after_seconds(domain, None) is None


def test_requested_timeout_is_clamped_to_minimum() -> None:
    registry = get_timeout_policy_registry()

    timeout_seconds = registry.timeout_for(
        TimeoutDomain.SUITE_CASE, requested_timeout_seconds=0.001
    )

    assert (
        timeout_seconds
        == registry.policy_for(TimeoutDomain.SUITE_CASE).min_timeout_seconds
    )


def test_requested_timeout_is_clamped_to_maximum() -> None:
    policy = TimeoutPolicy(
        domain=TimeoutDomain.DRIVER_RUN,
        default_timeout_seconds=None,
        min_timeout_seconds=1.0,
        max_timeout_seconds=60.0,
        signal=SignalPolicy(warning_fraction=0.5, terminate_grace_seconds=1.0),
    )
    registry = TimeoutPolicyRegistry(policies={policy.domain: policy})

    assert registry.timeout_for(TimeoutDomain.DRIVER_RUN, 600.0) == 60.0
    assert registry.warning_after_seconds(TimeoutDomain.DRIVER_RUN, 60.0) == 30.0


def test_warning_disabled_for_cargo() -> None:
    registry = get_timeout_policy_registry()

    assert registry.warning_after_seconds(TimeoutDomain.CARGO, 600.0) is None


def test_clamped_request_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    registry = get_timeout_policy_registry()

    with caplog.at_level(logging.WARNING):
        timeout_seconds = registry.timeout_for(TimeoutDomain.DRIVER_RUN, 0.25)

    assert timeout_seconds == 1.0
    assert "timeout of 0.25s is outside" in caplog.text


def test_request_within_bounds_is_not_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    registry = get_timeout_policy_registry()

    with caplog.at_level(logging.WARNING):
        timeout_seconds = registry.timeout_for(TimeoutDomain.DRIVER_RUN, 30.0)

    assert timeout_seconds == 30.0
    assert caplog.text == ""
