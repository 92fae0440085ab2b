"""
Turns an XSpec report document, or the error that prevented one, into a
leaf ``TestResults``.
"""

from xspec_harness.engine.base import TransformEngine
from xspec_harness.reporting.models import ResultsBuilder, TestResults

XSPEC_NS = "http://www.jenitennison.com/xslt/xspec"
NAMESPACES = {"x": XSPEC_NS}

REPORT_QUERY = "/x:report"
PENDING_QUERY = "//x:test[@pending]"
PASSED_QUERY = "//x:test[not(@pending) and @successful = 'true']"
FAILED_QUERY = "//x:test[not(@pending) and @successful = 'false']"

NOT_A_REPORT = "result document is not an XSpec report"


def from_report(name: str, document, engine: TransformEngine, duration: float) -> TestResults:
    """Count pending, passed and failed ``x:test`` elements of a report.

    A document whose root is not ``x:report`` is classified as an error so it
    cannot be mistaken for a report with no assertions.
    """
    builder = ResultsBuilder(name).with_duration(duration)
    if engine.count(document, REPORT_QUERY, NAMESPACES) != 1:
        return builder.with_counts(errors=1).with_message(NOT_A_REPORT).build()
    return builder.with_counts(
        pending=engine.count(document, PENDING_QUERY, NAMESPACES),
        passed=engine.count(document, PASSED_QUERY, NAMESPACES),
        failed=engine.count(document, FAILED_QUERY, NAMESPACES),
    ).build()


def from_exception(name: str, error: BaseException, duration: float) -> TestResults:
    return (
        ResultsBuilder(name)
        .with_counts(errors=1)
        .with_duration(duration)
        .with_message(str(error) or type(error).__name__)
        .build()
    )
