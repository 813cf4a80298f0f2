"""Error kinds raised while resolving, composing and running the verifier."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class HarnessError(Exception):
    """Base exception for harness failures."""

    pass


class ConfigurationMissingError(HarnessError):
    """Raised when required configuration (e.g. the pinned version) is absent."""

    pass


class DependencyNotFoundError(HarnessError):
    """Raised when a required library or artifact cannot be found."""

    def __init__(self, what: str, searched: Path | str) -> None:
        self.what = what
        self.searched = searched
        super().__init__(f"{what} not found under {searched}")


class AmbiguousDependencyError(HarnessError):
    """Raised when a lookup that must be unique yields several candidates."""

    def __init__(self, what: str, candidates: Sequence[Path]) -> None:
        self.what = what
        self.candidates = tuple(candidates)
        listing = ", ".join(str(candidate) for candidate in self.candidates)
        super().__init__(
            f"Expected exactly one {what}, found {len(self.candidates)}: {listing}"
        )


class ExternalProcessFailureError(HarnessError):
    """Raised when the verifier driver exits with a non-zero status."""

    def __init__(
        self,
        exit_code: int,
        *,
        case: Path | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.exit_code = exit_code
        self.case = case
        self.stdout = stdout
        self.stderr = stderr
        target = f" on {case}" if case is not None else ""
        super().__init__(f"Driver failed{target} with exit status {exit_code}")


class HarnessIOError(HarnessError):
    """Raised when the timing log or corpus cannot be read or written."""

    pass
