import dataclasses

import pytest
from lxml import etree

from xspec_harness.core.errors import TransformError
from xspec_harness.engine import LxmlEngine
from xspec_harness.reporting.classifier import NOT_A_REPORT, from_exception, from_report
from xspec_harness.reporting.models import ResultsBuilder, TestResults, format_elapsed
from xspec_harness.tests.samples import XSPEC_NS


def _report(body: str):
    return etree.ElementTree(etree.fromstring(f'<x:report xmlns:x="{XSPEC_NS}">{body}</x:report>'))


def test_builder_sums_sub_results_in_order() -> None:
    builder = ResultsBuilder("")
    builder.add_sub_results(TestResults("a", pending=1, passed=2, duration=0.5))
    builder.add_sub_results(TestResults("b", failed=1, errors=1, duration=0.25))

    result = builder.build()

    assert [sub.name for sub in result.sub_results] == ["a", "b"]
    assert (result.pending, result.passed, result.failed, result.errors) == (1, 2, 1, 1)
    assert result.duration == pytest.approx(0.75)
    assert result.total == 5
    assert not result.successful


def test_build_returns_independent_snapshots() -> None:
    builder = ResultsBuilder("batch")
    builder.add_sub_results(TestResults("a", passed=1))
    first = builder.build()

    builder.add_sub_results(TestResults("b", passed=1))
    second = builder.build()

    assert first.passed == 1
    assert len(first.sub_results) == 1
    assert second.passed == 2
    assert len(second.sub_results) == 2


def test_results_are_frozen() -> None:
    result = TestResults("a", passed=1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.passed = 2


def test_with_counts_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        ResultsBuilder("a").with_counts(failed=-1)


def test_str_summarises_counts() -> None:
    result = TestResults("greet", pending=1, passed=2, failed=3, errors=0, duration=1.5)

    assert str(result) == (
        "greet: Tests run: 6, Passed: 2, Failures: 3, Errors: 0, Pending: 1, Time elapsed: 1.500 s"
    )


def test_format_elapsed_minutes() -> None:
    assert format_elapsed(0.0126) == "0.013 s"
    assert format_elapsed(125.5) == "2 min 5.500 s"


def test_to_dict_includes_message_and_sub_results() -> None:
    leaf = from_exception("broken", TransformError("no such file"), 0.1)
    data = ResultsBuilder("").add_sub_results(leaf).build().to_dict()

    assert data["errors"] == 1
    assert data["sub_results"][0]["message"] == "no such file"
    assert "message" not in data


def test_from_report_counts_tests() -> None:
    document = _report(
        '<x:scenario>'
        '<x:test successful="true"/><x:test successful="true"/>'
        '<x:test successful="false"/>'
        '<x:test pending="later"/><x:test pending="" successful="false"/>'
        '</x:scenario>'
    )

    result = from_report("t", document, LxmlEngine(), 0.2)

    assert (result.pending, result.passed, result.failed, result.errors) == (2, 2, 1, 0)
    assert result.duration == 0.2


def test_from_report_with_no_tests_yields_zero_counts() -> None:
    result = from_report("empty", _report(""), LxmlEngine(), 0.0)

    assert result.total == 0
    assert result.successful


def test_from_report_rejects_other_documents() -> None:
    document = etree.ElementTree(etree.fromstring("<html/>"))

    result = from_report("odd", document, LxmlEngine(), 0.0)

    assert result.errors == 1
    assert result.message == NOT_A_REPORT


def test_from_exception_without_message_uses_type_name() -> None:
    result = from_exception("t", TransformError(), 1.0)

    assert (result.pending, result.passed, result.failed, result.errors) == (0, 0, 0, 1)
    assert result.message == "TransformError"
