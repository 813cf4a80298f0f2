"""Lookup of the prebuilt crate passed to the driver via ``--extern``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from veriharness.errors import AmbiguousDependencyError, DependencyNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExternArtifact:
    """A crate name bound to its compiled library file."""

    crate_name: str
    path: Path

    def as_argument(self) -> str:
        """Format as the ``--extern`` value ``name=path``."""
        return f"{self.crate_name}={self.path}"


def resolve_extern_artifact(deps_dir: Path, crate_name: str) -> ExternArtifact:
    """Resolve ``lib<crate_name>-*.rlib`` inside a profile's deps directory.

    Exactly one candidate must exist.

    Raises:
        DependencyNotFoundError: No candidate (or the directory is missing).
        AmbiguousDependencyError: Several candidates, e.g. stale builds.
    """
    pattern = f"lib{crate_name}-*.rlib"
    candidates = sorted(deps_dir.glob(pattern)) if deps_dir.is_dir() else []

    if not candidates:
        raise DependencyNotFoundError(pattern, deps_dir)
    if len(candidates) > 1:
        raise AmbiguousDependencyError(pattern, candidates)

    logger.debug("Resolved extern %s -> %s", crate_name, candidates[0])
    return ExternArtifact(crate_name=crate_name, path=candidates[0])
