"""Mapping of parsed JUnit reports to execution results."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from nx_test_executor.execution_results import (
    TEXT_OUTPUT_TYPE,
    ExecutionResult,
    ExecutionStatus,
    StepResult,
)

from .junit_reader import STATUS_PASSED
from .report_models import ReportSuite, ReportTest

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MINUTE = 60 * _NANOS_PER_SECOND
_NANOS_PER_HOUR = 60 * _NANOS_PER_MINUTE
_SUBSECOND_UNITS = (("ms", 1_000_000), ("µs", 1_000), ("ns", 1))


def map_junit_to_execution_result(
    output: bytes,
    suites: Sequence[ReportSuite],
    *,
    status_from_steps: bool = False,
) -> ExecutionResult:
    """Build a passed result holding the output and one step per report test.

    Failing steps do not change the overall status unless `status_from_steps` is set.
    """
    steps = tuple(
        StepResult(
            name=f"{suite.name} - {test.name}",
            duration=format_duration(test.duration_seconds),
            status=map_status(test.status),
        )
        for suite, test in flatten_suites(suites)
    )
    result = ExecutionResult(
        status=ExecutionStatus.PASSED,
        output=output.decode("utf-8", errors="replace"),
        output_type=TEXT_OUTPUT_TYPE,
        steps=steps,
    )
    if status_from_steps and result.failed_steps:
        return result.with_status(ExecutionStatus.FAILED)
    return result


def flatten_suites(
    suites: Sequence[ReportSuite], *, recursive: bool = False
) -> Iterator[tuple[ReportSuite, ReportTest]]:
    """Yield `(suite, test)` pairs; sub-suites are only visited when `recursive`."""
    for suite in suites:
        for test in suite.tests:
            yield suite, test
        if recursive:
            yield from flatten_suites(suite.suites, recursive=True)


def map_status(raw_status: str) -> ExecutionStatus:
    """Only the exact string "passed" passes; every other status fails."""
    if raw_status == STATUS_PASSED:
        return ExecutionStatus.PASSED
    return ExecutionStatus.FAILED


def format_duration(seconds: float) -> str:
    """Render seconds the way Go prints a time.Duration (`1.5s`, `250ms`, `1m30s`)."""
    nanos = round(seconds * _NANOS_PER_SECOND)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < _NANOS_PER_SECOND:
        for unit, size in _SUBSECOND_UNITS:
            if nanos >= size:
                return f"{sign}{_decimal(nanos, size)}{unit}"
    hours, remainder = divmod(nanos, _NANOS_PER_HOUR)
    minutes, remainder = divmod(remainder, _NANOS_PER_MINUTE)
    text = f"{_decimal(remainder, _NANOS_PER_SECOND)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


def _decimal(value: int, unit_size: int) -> str:
    whole, fraction = divmod(value, unit_size)
    if not fraction:
        return str(whole)
    width = len(str(unit_size)) - 1
    return f"{whole}.{str(fraction).rjust(width, '0').rstrip('0')}"
