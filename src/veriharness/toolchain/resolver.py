"""Pinned toolchain version handling and toolchain path construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from veriharness.config.settings import DEFAULT_TARGET_TRIPLE
from veriharness.errors import ConfigurationMissingError

logger = logging.getLogger(__name__)


def read_pinned_version(path: Path) -> str:
    """Read the pinned toolchain identifier from a version-pin file.

    The identifier is the first non-blank line of the file.

    Raises:
        ConfigurationMissingError: If the file is missing, unreadable or blank.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationMissingError(
            f"Cannot read pinned toolchain version from {path}: {exc}"
        ) from exc

    for line in content.splitlines():
        version = line.strip()
        if version:
            logger.debug("Pinned toolchain %s (from %s)", version, path)
            return version

    raise ConfigurationMissingError(f"Pinned toolchain file is empty: {path}")


@dataclass(frozen=True, slots=True)
class ToolchainResolver:
    """Builds toolchain directories from a pinned version and install root.

    Path construction only: nothing here touches the filesystem, so a
    toolchain that is not installed surfaces later as a launch failure.
    """

    target_triple: str = DEFAULT_TARGET_TRIPLE

    def toolchain_dir(self, pinned_version: str, installation_root: Path) -> Path:
        """Return ``<root>/<version>-<triple>``."""
        version = pinned_version.strip()
        if not version:
            raise ConfigurationMissingError("Pinned toolchain version is empty")
        return installation_root / f"{version}-{self.target_triple}"

    def resolve(self, pinned_version: str, installation_root: Path) -> Path:
        """Return the toolchain's runtime library directory."""
        return self.toolchain_dir(pinned_version, installation_root) / "lib"

    def target_lib_dir(self, runtime_lib_dir: Path) -> Path:
        """Return the target standard-library directory passed via ``-L``."""
        return runtime_lib_dir / "rustlib" / self.target_triple / "lib"
