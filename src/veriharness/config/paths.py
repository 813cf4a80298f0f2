"""Centralized path management for the harness workspace.

All paths are relative to a workspace root (the verifier checkout):
- Harness state: <workspace>/.veriharness/ (debug log, config.yaml)
- Pinned toolchain: <workspace>/rust-toolchain
- Build outputs: <workspace>/target/{debug,release}[/deps]
- Timing log: <workspace>/timings
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from veriharness.runtime.profile import RunProfile


@dataclass(frozen=True)
class HarnessPaths:
    """Centralized path layout for one workspace."""

    workspace: Path

    # === HARNESS STATE ===

    @property
    def workspace_config(self) -> Path:
        """Workspace .veriharness/ directory."""
        return self.workspace / ".veriharness"

    @property
    def config_file(self) -> Path:
        """Optional harness config: .veriharness/config.yaml"""
        return self.workspace_config / "config.yaml"

    @property
    def debug_log(self) -> Path:
        """Debug log: .veriharness/debug.log"""
        return self.workspace_config / "debug.log"

    # === WORKSPACE INPUTS ===

    @property
    def toolchain_file(self) -> Path:
        """Pinned toolchain version file."""
        return self.workspace / "rust-toolchain"

    @property
    def timings_log(self) -> Path:
        """Default append-only timing log."""
        return self.workspace / "timings"

    # === BUILD OUTPUTS ===

    @property
    def target_dir(self) -> Path:
        """Cargo target directory."""
        return self.workspace / "target"

    def build_dir(self, profile: RunProfile) -> Path:
        """Build output directory for a profile (target/debug, target/release)."""
        return self.target_dir / profile.value

    def deps_dir(self, profile: RunProfile) -> Path:
        """Dependency artifacts directory for a profile."""
        return self.build_dir(profile) / "deps"

    def driver_path(self, profile: RunProfile, driver_name: str) -> Path:
        """Driver binary built for a profile."""
        return self.build_dir(profile) / driver_name


# Singleton instance
_paths: HarnessPaths | None = None


def get_paths(workspace: Path | None = None) -> HarnessPaths:
    """Get the paths singleton.

    On first call, optionally set the workspace directory.
    Subsequent calls return the same instance.

    Args:
        workspace: The workspace directory. If not provided on first call,
                   defaults to current working directory.

    Returns:
        The HarnessPaths singleton instance.
    """
    global _paths
    if _paths is None:
        _paths = HarnessPaths(workspace=workspace or Path.cwd())
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
