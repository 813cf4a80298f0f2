"""Suite discovery, timing log and fail-fast execution."""

from veriharness.suite.discovery import (
    LONG_PASS_CORPUS,
    LONG_PASS_OVERFLOW_CORPUS,
    TestCase,
    discover_cases,
)
from veriharness.suite.runner import CaseOutcome, SuiteResult, SuiteRunner, SuiteStatus
from veriharness.suite.timing_log import TimingLog, TimingRecord

__all__ = [
    "LONG_PASS_CORPUS",
    "LONG_PASS_OVERFLOW_CORPUS",
    "CaseOutcome",
    "SuiteResult",
    "SuiteRunner",
    "SuiteStatus",
    "TestCase",
    "TimingLog",
    "TimingRecord",
    "discover_cases",
]
