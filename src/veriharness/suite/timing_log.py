"""Append-only timing log shared across suite runs.

One line per executed case: ``<input-path> <elapsed-seconds>``. The file is
never truncated or rotated here, and concurrent writers are not coordinated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from veriharness.errors import HarnessIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimingRecord:
    """Elapsed wall-clock seconds for one case."""

    case: str
    elapsed_seconds: int

    def to_line(self) -> str:
        return f"{self.case} {self.elapsed_seconds}"

    @classmethod
    def from_line(cls, line: str) -> "TimingRecord":
        """Parse a log line; the case path may itself contain spaces."""
        case, sep, elapsed = line.rstrip("\n").rpartition(" ")
        if not sep or not case:
            raise ValueError(f"Malformed timing line: {line!r}")
        return cls(case=case, elapsed_seconds=int(elapsed))


@dataclass(frozen=True, slots=True)
class TimingLog:
    """The timing log file."""

    path: Path

    def append(self, record: TimingRecord) -> None:
        """Append one record.

        Raises:
            HarnessIOError: If the log cannot be written.
        """
        try:
            with open(self.path, "a", encoding="utf-8") as handle:
                handle.write(record.to_line() + "\n")
        except OSError as exc:
            raise HarnessIOError(
                f"Cannot append timing for {record.case} to {self.path}: {exc}"
            ) from exc
        logger.debug("Recorded timing %s", record.to_line())

    def read_records(self) -> list[TimingRecord]:
        """Read all well-formed records; a missing log reads as empty."""
        if not self.path.exists():
            return []
        records: list[TimingRecord] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                records.append(TimingRecord.from_line(line))
            except ValueError:
                logger.warning("Skipping malformed timing line in %s", self.path)
        return records
