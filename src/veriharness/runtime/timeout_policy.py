"""Central timeout policy definitions and resolution helpers.

Timeouts are opt-in: every domain defaults to no limit, and a limit only
applies when the operator requests one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TimeoutDomain(str, Enum):
    """Logical command domains with distinct timeout behavior."""

    DRIVER_RUN = "driver_run"
    SUITE_CASE = "suite_case"
    CARGO = "cargo"


@dataclass(frozen=True, slots=True)
class SignalPolicy:
    """Process signaling behavior when a timeout is crossed."""

    warning_fraction: float
    terminate_grace_seconds: float


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """Resolved policy for a timeout domain."""

    domain: TimeoutDomain
    default_timeout_seconds: float | None
    min_timeout_seconds: float
    max_timeout_seconds: float | None
    signal: SignalPolicy


class TimeoutPolicyRegistry:
    """Registry that resolves timeout policies and effective limits."""

    def __init__(
        self,
        policies: dict[TimeoutDomain, TimeoutPolicy] | None = None,
    ) -> None:
        self._policies = policies or {
            TimeoutDomain.DRIVER_RUN: TimeoutPolicy(
                domain=TimeoutDomain.DRIVER_RUN,
                default_timeout_seconds=None,
                min_timeout_seconds=1.0,
                max_timeout_seconds=None,
                signal=SignalPolicy(
                    warning_fraction=0.8,
                    terminate_grace_seconds=10.0,
                ),
            ),
            TimeoutDomain.SUITE_CASE: TimeoutPolicy(
                domain=TimeoutDomain.SUITE_CASE,
                default_timeout_seconds=None,
                min_timeout_seconds=1.0,
                max_timeout_seconds=None,
                signal=SignalPolicy(
                    warning_fraction=0.8,
                    terminate_grace_seconds=10.0,
                ),
            ),
            TimeoutDomain.CARGO: TimeoutPolicy(
                domain=TimeoutDomain.CARGO,
                default_timeout_seconds=None,
                min_timeout_seconds=30.0,
                max_timeout_seconds=None,
                signal=SignalPolicy(
                    warning_fraction=0.0,
                    terminate_grace_seconds=15.0,
                ),
            ),
        }

    def policy_for(self, domain: TimeoutDomain) -> TimeoutPolicy:
        """Return policy for a specific timeout domain."""
        return self._policies[domain]

    def timeout_for(
        self,
        domain: TimeoutDomain,
        requested_timeout_seconds: float | None = None,
    ) -> float | None:
        """Resolve the effective timeout, or None for no limit."""
        policy = self.policy_for(domain)
        timeout = (
            requested_timeout_seconds
            if requested_timeout_seconds is not None
            else policy.default_timeout_seconds
        )
        if timeout is None:
            return None
        clamped = self._clamp(
            timeout,
            policy.min_timeout_seconds,
            policy.max_timeout_seconds,
        )
        if clamped != timeout:
            logger.warning(
                "Requested %s timeout of %ss is outside [%s, %s]; using %ss",
                domain.value,
                timeout,
                policy.min_timeout_seconds,
                policy.max_timeout_seconds,
                clamped,
            )
        return clamped

    def warning_after_seconds(
        self,
        domain: TimeoutDomain,
        timeout_seconds: float | None,
    ) -> float | None:
        """Return warning threshold for a command timeout, if enabled."""
        if timeout_seconds is None:
            return None
        policy = self.policy_for(domain)
        fraction = policy.signal.warning_fraction
        if fraction <= 0.0 or fraction >= 1.0:
            return None
        warning = timeout_seconds * fraction
        if warning <= 0.0 or warning >= timeout_seconds:
            return None
        return warning

    @staticmethod
    def _clamp(value: float, minimum: float, maximum: float | None) -> float:
        if maximum is not None:
            value = min(value, maximum)
        return max(minimum, value)


_DEFAULT_TIMEOUT_POLICY_REGISTRY = TimeoutPolicyRegistry()


def get_timeout_policy_registry() -> TimeoutPolicyRegistry:
    """Return shared timeout policy registry."""
    return _DEFAULT_TIMEOUT_POLICY_REGISTRY
