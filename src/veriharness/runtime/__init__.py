"""Runtime primitives: profiles, environment composition and process launch."""

from veriharness.runtime.command_runner import (
    CommandEvent,
    CommandEventType,
    CommandResult,
    get_command_runner,
)
from veriharness.runtime.driver import DriverInvoker, RunResult
from veriharness.runtime.environment import ComposedEnvironment, EnvironmentComposer
from veriharness.runtime.profile import RunProfile
from veriharness.runtime.timeout_policy import (
    TimeoutDomain,
    get_timeout_policy_registry,
)

__all__ = [
    "CommandEvent",
    "CommandEventType",
    "CommandResult",
    "ComposedEnvironment",
    "DriverInvoker",
    "EnvironmentComposer",
    "RunProfile",
    "RunResult",
    "TimeoutDomain",
    "get_command_runner",
    "get_timeout_policy_registry",
]
