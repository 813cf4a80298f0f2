"""Fail-fast suite execution over a corpus of verifier inputs."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from veriharness.errors import ExternalProcessFailureError
from veriharness.runtime.driver import DriverInvoker, RunResult
from veriharness.runtime.environment import ComposedEnvironment
from veriharness.suite.discovery import TestCase, discover_cases
from veriharness.suite.timing_log import TimingLog, TimingRecord
from veriharness.toolchain.artifacts import ExternArtifact

logger = logging.getLogger(__name__)


class SuiteStatus(str, Enum):
    """Terminal state of a suite run."""

    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class CaseOutcome:
    """Result of one case, yielded after its timing was recorded."""

    case: TestCase
    result: RunResult
    record: TimingRecord

    @property
    def succeeded(self) -> bool:
        return self.result.succeeded


@dataclass(frozen=True, slots=True)
class SuiteResult:
    """Aggregate outcome of a suite run."""

    status: SuiteStatus
    records: tuple[TimingRecord, ...] = ()
    failed_case: TestCase | None = None
    failure: RunResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SuiteStatus.COMPLETED

    def raise_for_status(self) -> None:
        """Raise ``ExternalProcessFailureError`` if the suite was aborted."""
        if self.succeeded or self.failure is None:
            return
        raise ExternalProcessFailureError(
            self.failure.exit_code,
            case=self.failed_case.path if self.failed_case else None,
            stdout=self.failure.stdout,
            stderr=self.failure.stderr,
        )


@dataclass(slots=True)
class SuiteRunner:
    """Runs the driver over each case in order and stops at the first failure.

    Each case is timed and its record appended to the timing log whatever
    its outcome, before the continue/stop decision is taken. An interrupted
    case never reaches the append.
    """

    invoker: DriverInvoker
    timing_log: TimingLog
    extension: str = ".rs"
    extra_args: Sequence[str] = ()
    clock: Callable[[], float] = time.monotonic
    on_case_start: Callable[[TestCase], None] | None = None
    on_case_end: Callable[[CaseOutcome], None] | None = None

    def iter_outcomes(
        self,
        cases: Iterable[TestCase],
        environment: ComposedEnvironment,
        extern: ExternArtifact,
    ) -> Iterator[CaseOutcome]:
        """Yield one outcome per case, stopping after the first failure."""
        for case in cases:
            outcome = self._run_case(case, environment, extern)
            yield outcome
            if not outcome.succeeded:
                return

    def run_suite(
        self,
        corpus_directory: Path,
        environment: ComposedEnvironment,
        extern: ExternArtifact,
    ) -> SuiteResult:
        """Discover cases under ``corpus_directory`` and run them fail-fast."""
        cases = discover_cases(corpus_directory, self.extension)
        return self.run_cases(cases, environment, extern)

    def run_cases(
        self,
        cases: Iterable[TestCase],
        environment: ComposedEnvironment,
        extern: ExternArtifact,
    ) -> SuiteResult:
        """Run an explicit list of cases fail-fast."""
        records: list[TimingRecord] = []
        for outcome in self.iter_outcomes(cases, environment, extern):
            records.append(outcome.record)
            if not outcome.succeeded:
                logger.error(
                    "Suite aborted at %s (exit %s)",
                    outcome.case.label,
                    outcome.result.exit_code,
                )
                return SuiteResult(
                    status=SuiteStatus.ABORTED,
                    records=tuple(records),
                    failed_case=outcome.case,
                    failure=outcome.result,
                )

        logger.info("Suite completed: %d case(s)", len(records))
        return SuiteResult(status=SuiteStatus.COMPLETED, records=tuple(records))

    def _run_case(
        self,
        case: TestCase,
        environment: ComposedEnvironment,
        extern: ExternArtifact,
    ) -> CaseOutcome:
        logger.info("Testing '%s'...", case.label)
        if self.on_case_start is not None:
            self.on_case_start(case)

        started = self.clock()
        result = self.invoker.invoke(environment, extern, case.path, self.extra_args)
        elapsed = int(self.clock() - started)

        record = TimingRecord(case=case.label, elapsed_seconds=elapsed)
        self.timing_log.append(record)

        outcome = CaseOutcome(case=case, result=result, record=record)
        if self.on_case_end is not None:
            self.on_case_end(outcome)
        return outcome
