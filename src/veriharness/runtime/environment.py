"""Composition of the library search path and environment for a profile.

The search path is always ordered toolchain runtime libraries, then the JVM
native library directory, then the profile's build outputs. Earlier entries
shadow later ones when the dynamic loader resolves a library name.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from veriharness.config.paths import HarnessPaths
from veriharness.config.settings import HarnessSettings
from veriharness.runtime.profile import RunProfile
from veriharness.toolchain.jvm import JvmLocator
from veriharness.toolchain.resolver import ToolchainResolver, read_pinned_version

logger = logging.getLogger(__name__)


def library_path_variable(platform: str | None = None) -> str:
    """Name of the dynamic loader search path variable on a platform."""
    platform = platform or sys.platform
    if platform == "darwin":
        return "DYLD_LIBRARY_PATH"
    return "LD_LIBRARY_PATH"


@dataclass(frozen=True, slots=True)
class ComposedEnvironment:
    """Search path and environment mapping for one profile."""

    profile: RunProfile
    search_path: tuple[Path, ...]
    env: Mapping[str, str]
    target_lib_dir: Path
    java_home: Path

    @property
    def search_path_value(self) -> str:
        return os.pathsep.join(str(entry) for entry in self.search_path)

    def with_overrides(self, **variables: str) -> "ComposedEnvironment":
        """Return a copy with extra environment variables layered on top."""
        return replace(self, env={**self.env, **variables})


@dataclass(frozen=True, slots=True)
class EnvironmentComposer:
    """Builds a ``ComposedEnvironment`` from resolvers and the workspace layout."""

    paths: HarnessPaths
    resolver: ToolchainResolver = field(default_factory=ToolchainResolver)
    jvm_locator: JvmLocator = field(default_factory=JvmLocator)

    def build_dirs(self, profile: RunProfile) -> tuple[Path, Path]:
        """Profile build-output directories in search order."""
        return (self.paths.build_dir(profile), self.paths.deps_dir(profile))

    def compose(
        self,
        profile: RunProfile,
        pinned_version: str,
        toolchain_root: Path,
        jvm_root: Path,
        *,
        base_env: Mapping[str, str] | None = None,
        ambient: Mapping[str, str] | None = None,
    ) -> ComposedEnvironment:
        """Compose the search path and environment for one invocation.

        Args:
            profile: Active build profile.
            pinned_version: Pinned toolchain identifier.
            toolchain_root: Toolchain installation root.
            jvm_root: JVM installation root (exported as JAVA_HOME).
            base_env: Caller environment copied into the result unchanged.
            ambient: Pass-through values (verbosity, parallelism) set as given.

        Raises:
            ConfigurationMissingError: Empty pinned version.
            DependencyNotFoundError: No JVM library under ``jvm_root``.
            AmbiguousDependencyError: Several JVM libraries under ``jvm_root``.
        """
        toolchain_lib = self.resolver.resolve(pinned_version, toolchain_root)
        jvm_lib = self.jvm_locator.locate(jvm_root)
        search_path = (toolchain_lib, jvm_lib, *self.build_dirs(profile))

        env: dict[str, str] = dict(base_env or {})
        env.update(ambient or {})
        env[library_path_variable()] = os.pathsep.join(str(p) for p in search_path)
        env["JAVA_HOME"] = str(jvm_root)

        logger.info(
            "Composed %s environment: %s",
            profile.value,
            env[library_path_variable()],
        )
        return ComposedEnvironment(
            profile=profile,
            search_path=search_path,
            env=env,
            target_lib_dir=self.resolver.target_lib_dir(toolchain_lib),
            java_home=jvm_root,
        )


def compose_for_workspace(
    paths: HarnessPaths,
    settings: HarnessSettings,
    profile: RunProfile,
    base_env: Mapping[str, str] | None = None,
) -> ComposedEnvironment:
    """Read the pinned version and compose the environment for a workspace."""
    composer = EnvironmentComposer(
        paths=paths,
        resolver=ToolchainResolver(target_triple=settings.target_triple),
    )
    return composer.compose(
        profile,
        read_pinned_version(paths.toolchain_file),
        settings.toolchain_root,
        settings.java_home,
        base_env=os.environ if base_env is None else base_env,
        ambient={"RUST_TEST_THREADS": settings.test_threads},
    )
