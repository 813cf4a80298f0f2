"""Locate the native JVM shared library under a JVM installation root."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from veriharness.errors import AmbiguousDependencyError, DependencyNotFoundError

logger = logging.getLogger(__name__)


def native_jvm_library_name(platform: str | None = None) -> str:
    """File name of the native JVM library on a platform."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "jvm.dll"
    if platform == "darwin":
        return "libjvm.dylib"
    return "libjvm.so"


def find_files_named(root: Path, name: str) -> list[Path]:
    """Walk the whole tree under ``root`` and collect every file called ``name``.

    Directory symlinks inside the tree are not followed.
    """
    matches: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        if name in filenames:
            matches.append(Path(dirpath) / name)
    return sorted(matches)


@dataclass(frozen=True, slots=True)
class JvmLocator:
    """Finds the single directory holding the native JVM library."""

    library_name: str = field(default_factory=native_jvm_library_name)

    def locate(self, installation_root: Path) -> Path:
        """Return the directory containing the JVM library under a root.

        Raises:
            DependencyNotFoundError: No match (or the root does not exist).
            AmbiguousDependencyError: More than one match.
        """
        root = installation_root.resolve()
        if not root.is_dir():
            raise DependencyNotFoundError(self.library_name, installation_root)

        logger.debug("Searching %s for %s", root, self.library_name)
        matches = find_files_named(root, self.library_name)

        if not matches:
            raise DependencyNotFoundError(self.library_name, root)
        if len(matches) > 1:
            raise AmbiguousDependencyError(self.library_name, matches)

        logger.info("Found %s in %s", self.library_name, matches[0].parent)
        return matches[0].parent
