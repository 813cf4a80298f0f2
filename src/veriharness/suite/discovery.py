"""Corpus discovery for verification suites."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from veriharness.errors import HarnessIOError

logger = logging.getLogger(__name__)

LONG_PASS_CORPUS = Path("prusti/tests/verify/long-pass")
LONG_PASS_OVERFLOW_CORPUS = Path("prusti/tests/verify/long-pass-overflow")


@dataclass(frozen=True, slots=True)
class TestCase:
    """A single input file in a corpus."""

    __test__ = False  # not a pytest class

    path: Path

    @property
    def label(self) -> str:
        """Identity written to the timing log."""
        return str(self.path)


def discover_cases(corpus_root: Path, extension: str = ".rs") -> list[TestCase]:
    """Collect every file with ``extension`` under ``corpus_root``.

    Cases are returned sorted by path so timing logs are reproducible
    across filesystems.

    Raises:
        HarnessIOError: If the corpus directory is missing or unreadable.
    """
    if not corpus_root.is_dir():
        raise HarnessIOError(f"Corpus directory not found: {corpus_root}")

    suffix = extension if extension.startswith(".") else f".{extension}"
    try:
        files = [
            candidate
            for candidate in corpus_root.rglob(f"*{suffix}")
            if candidate.is_file()
        ]
    except OSError as exc:
        raise HarnessIOError(f"Cannot read corpus {corpus_root}: {exc}") from exc

    cases = [TestCase(path=path) for path in sorted(files)]
    logger.info("Discovered %d case(s) under %s", len(cases), corpus_root)
    return cases
