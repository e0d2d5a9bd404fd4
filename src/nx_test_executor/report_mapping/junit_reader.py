"""JUnit XML report reader for captured task runner output."""

from __future__ import annotations

import re
from collections.abc import Iterator

from lxml import etree

from .report_models import ReportSuite, ReportTest

STATUS_PASSED = "passed"
STATUS_FAILED = "failed"
STATUS_ERROR = "error"
STATUS_SKIPPED = "skipped"

_REPORT_START = re.compile(rb"<testsuites?\b")
_XML_DECLARATION = re.compile(rb"<\?xml[^>]*\?>")
_WRAPPER_TAG = b"captured-output"


class ReportParseError(Exception):
    """Raised when the captured output contains no readable JUnit report."""


def parse_junit_report(output: bytes) -> tuple[ReportSuite, ...]:
    """Parse the JUnit suites embedded in `output`.

    Log lines before the report and XML declarations are ignored; the parser runs in
    recovering mode so trailing noise does not hide the suites already read.
    """
    start = _REPORT_START.search(output)
    if start is None:
        raise ReportParseError("no JUnit testsuite element found in output")
    payload = _XML_DECLARATION.sub(b"", output[start.start() :])
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(
            b"<" + _WRAPPER_TAG + b">" + payload + b"</" + _WRAPPER_TAG + b">",
            parser=parser,
        )
    except etree.XMLSyntaxError as exc:
        raise ReportParseError(f"reading JUnit report: {exc}") from exc
    if root is None:
        raise ReportParseError("reading JUnit report: document is empty")

    suites = tuple(_parse_suite(element) for element in _top_level_suites(root))
    if not suites:
        raise ReportParseError("no JUnit testsuite element found in output")
    return suites


def _top_level_suites(element: etree._Element) -> Iterator[etree._Element]:
    for child in element:
        if not isinstance(child.tag, str):
            continue
        if child.tag == "testsuite":
            yield child
        else:
            yield from _top_level_suites(child)


def _parse_suite(element: etree._Element) -> ReportSuite:
    tests: list[ReportTest] = []
    suites: list[ReportSuite] = []
    for child in element:
        if child.tag == "testcase":
            tests.append(_parse_test(child))
        elif child.tag == "testsuite":
            suites.append(_parse_suite(child))
    return ReportSuite(name=element.get("name", ""), tests=tuple(tests), suites=tuple(suites))


def _parse_test(element: etree._Element) -> ReportTest:
    status = STATUS_PASSED
    message = ""
    for tag, child_status in (
        ("failure", STATUS_FAILED),
        ("error", STATUS_ERROR),
        ("skipped", STATUS_SKIPPED),
    ):
        outcome = element.find(tag)
        if outcome is not None:
            status = child_status
            message = outcome.get("message") or (outcome.text or "").strip()
            break
    return ReportTest(
        name=element.get("name", ""),
        classname=element.get("classname", ""),
        duration_seconds=_parse_seconds(element.get("time")),
        status=status,
        message=message,
    )


def _parse_seconds(raw: str | None) -> float:
    if not raw:
        return 0.0
    try:
        return float(raw.replace(",", "").strip())
    except ValueError:
        return 0.0
