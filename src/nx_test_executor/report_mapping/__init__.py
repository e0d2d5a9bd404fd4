"""Report mapping exports."""

from .junit_reader import ReportParseError, parse_junit_report
from .report_models import ReportSuite, ReportTest
from .result_mapper import (
    flatten_suites,
    format_duration,
    map_junit_to_execution_result,
    map_status,
)

__all__ = [
    "ReportParseError",
    "ReportSuite",
    "ReportTest",
    "flatten_suites",
    "format_duration",
    "map_junit_to_execution_result",
    "map_status",
    "parse_junit_report",
]
