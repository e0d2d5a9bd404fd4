"""Parsed test report entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReportTest:
    """One `<testcase>` of a JUnit report."""

    name: str
    classname: str
    duration_seconds: float
    status: str
    message: str = ""


@dataclass(frozen=True)
class ReportSuite:
    """One `<testsuite>`; nested suites are kept as a tree."""

    name: str
    tests: tuple[ReportTest, ...] = ()
    suites: tuple[ReportSuite, ...] = ()
