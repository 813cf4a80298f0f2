"""Tests for the append-only timing log."""

from __future__ import annotations

from pathlib import Path

import pytest

from veriharness.errors import HarnessIOError
from veriharness.suite.timing_log import TimingLog, TimingRecord


def test_append_preserves_existing_lines(tmp_path: Path) -> None:
    path = tmp_path / "timings"
    path.write_text("old/case.rs 7\n", encoding="utf-8")
    log = TimingLog(path)

    log.append(TimingRecord(case="new/case.rs", elapsed_seconds=2))

    assert path.read_text(encoding="utf-8") == "old/case.rs 7\nnew/case.rs 2\n"
    assert log.read_records() == [
        TimingRecord("old/case.rs", 7),
        TimingRecord("new/case.rs", 2),
    ]


def test_record_round_trips_paths_with_spaces() -> None:
    record = TimingRecord(case="dir with space/a.rs", elapsed_seconds=12)

    assert TimingRecord.from_line(record.to_line()) == record


def test_read_records_skips_malformed_lines(tmp_path: Path) -> None:
    path = tmp_path / "timings"
    path.write_text("a.rs 1\ngarbage\nb.rs x\n\nc.rs 3\n", encoding="utf-8")

    records = TimingLog(path).read_records()

    assert [record.case for record in records] == ["a.rs", "c.rs"]


def test_missing_log_reads_as_empty(tmp_path: Path) -> None:
    assert TimingLog(tmp_path / "timings").read_records() == []


def test_append_to_unwritable_log_raises(tmp_path: Path) -> None:
    log = TimingLog(tmp_path / "missing-dir" / "timings")

    with pytest.raises(HarnessIOError, match="Cannot append timing"):
        log.append(TimingRecord(case="a.rs", elapsed_seconds=1))
