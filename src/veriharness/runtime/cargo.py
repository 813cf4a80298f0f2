"""Cargo targets run inside the composed verifier environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from veriharness.errors import DependencyNotFoundError
from veriharness.runtime.command_runner import (
    CommandResult,
    CommandRunner,
    get_command_runner,
)
from veriharness.runtime.environment import ComposedEnvironment
from veriharness.runtime.profile import RunProfile
from veriharness.runtime.timeout_policy import TimeoutDomain

# Instrumented build flags for coverage profiling (nightly only)
COVERAGE_RUSTFLAGS = " ".join(
    (
        "-Zprofile",
        "-Ccodegen-units=1",
        "-Cinline-threshold=0",
        "-Clink-dead-code",
        "-Coverflow-checks=off",
        "-Zno-landing-pads",
    )
)


@dataclass(frozen=True, slots=True)
class CargoTarget:
    """A named cargo invocation and the extra variables it needs."""

    name: str
    args: tuple[str, ...]
    extra_env: tuple[tuple[str, str], ...] = ()
    honors_profile: bool = True


CARGO_TARGETS: dict[str, CargoTarget] = {
    target.name: target
    for target in (
        CargoTarget("build", ("build", "--all")),
        CargoTarget("check", ("check", "--all")),
        CargoTarget("test", ("test", "--all")),
        CargoTarget(
            "test-deep",
            ("test", "--all"),
            extra_env=(("PRUSTI_CHECK_FOLDUNFOLD_STATE", "1"),),
        ),
        CargoTarget("test-examples", ("test", "-p", "prusti")),
        CargoTarget(
            "build-profile",
            ("build", "--all"),
            extra_env=(
                ("CARGO_INCREMENTAL", "0"),
                ("RUSTFLAGS", COVERAGE_RUSTFLAGS),
            ),
            honors_profile=False,
        ),
        CargoTarget("bench", ("bench", "--all")),
        CargoTarget("doc", ("doc", "--all"), honors_profile=False),
        CargoTarget("clippy", ("clippy", "--all"), honors_profile=False),
        CargoTarget("fix", ("fix",), honors_profile=False),
    )
}


def build_cargo_command(target: CargoTarget, profile: RunProfile) -> list[str]:
    """Build the cargo argument vector for a target and profile."""
    command = ["cargo", *target.args]
    if target.honors_profile:
        command.extend(profile.cargo_args)
    return command


@dataclass(slots=True)
class CargoInvoker:
    """Runs cargo targets in the workspace with the composed environment."""

    workspace: Path
    runner: CommandRunner = field(default_factory=get_command_runner)

    def run(self, target_name: str, environment: ComposedEnvironment) -> CommandResult:
        """Run a named target.

        Raises:
            KeyError: Unknown target name.
            DependencyNotFoundError: cargo could not be launched.
        """
        target = CARGO_TARGETS[target_name]
        env = environment.with_overrides(**dict(target.extra_env)).env
        try:
            return self.runner.run(
                command=build_cargo_command(target, environment.profile),
                domain=TimeoutDomain.CARGO,
                cwd=self.workspace,
                env=env,
            )
        except OSError as exc:
            raise DependencyNotFoundError("cargo", env.get("PATH", "PATH")) from exc
