"""Build profiles selecting which target tree a command operates on."""

from __future__ import annotations

from enum import Enum


class RunProfile(str, Enum):
    """Cargo build profile; the value is the target subdirectory name."""

    DEBUG = "debug"
    RELEASE = "release"

    @classmethod
    def from_flag(cls, release: bool) -> "RunProfile":
        """Map a ``--release`` style flag to a profile."""
        return cls.RELEASE if release else cls.DEBUG

    @property
    def cargo_args(self) -> tuple[str, ...]:
        """Extra cargo arguments selecting this profile."""
        if self is RunProfile.RELEASE:
            return ("--release",)
        return ()
