from pathlib import Path

from typer.testing import CliRunner

from xspec_harness.cli import app
from xspec_harness.tests.samples import MALFORMED_XSPEC, MIXED_XSPEC, PASSING_XSPEC, write_test

runner = CliRunner()


def test_run_passing_file_exits_zero(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    test_file = write_test(tmp_path / "tests", "greet", PASSING_XSPEC)

    result = runner.invoke(app, ["run", str(test_file), "--report-dir", str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    assert "Running greet" in result.output
    assert (tmp_path / "out" / "TEST-greet.xml").exists()


def test_run_with_failures_exits_one(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    test_file = write_test(tmp_path / "tests", "mixed", MIXED_XSPEC)

    result = runner.invoke(app, ["run", str(test_file), "--report-dir", str(tmp_path / "out")])

    assert result.exit_code == 1


def test_run_suite_with_summary(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    write_test(tmp_path / "tests", "greet", PASSING_XSPEC)
    write_test(tmp_path / "tests", "broken", MALFORMED_XSPEC)
    suite = tmp_path / "suite.yaml"
    suite.write_text("tests:\n  greet: tests/greet.xspec\n  broken: tests/broken.xspec\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["run", "--suite", str(suite), "--report-dir", str(tmp_path / "out"), "--summary", "json"],
    )

    assert result.exit_code == 1
    assert (tmp_path / "out" / "OUT-broken.txt").exists()
    assert (tmp_path / "out" / "xspec-summary.json").exists()


def test_run_without_tests_is_a_usage_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 2


def test_run_with_invalid_suite_exits_two(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    suite = tmp_path / "suite.yaml"
    suite.write_text("nothing: here\n", encoding="utf-8")

    result = runner.invoke(app, ["run", "--suite", str(suite)])

    assert result.exit_code == 2


def test_run_with_invalid_summary_format_exits_two(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    test_file = write_test(tmp_path / "tests", "greet", PASSING_XSPEC)

    result = runner.invoke(app, ["run", str(test_file), "--summary", "pdf"])

    assert result.exit_code == 2


def test_doctor_passes_with_bundled_resources(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0, result.output
    assert "Bundled resources" in result.output


def test_doctor_prints_effective_configuration(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "xspec_harness.toml").write_text('[xspec_harness]\ncatalog_name = "mocks.xml"\n', encoding="utf-8")

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0, result.output
    assert "catalog_name = mocks.xml" in result.output


def test_run_writes_uncolored_log_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    test_file = write_test(tmp_path / "tests", "greet", PASSING_XSPEC)
    log_file = tmp_path / "harness.log"

    result = runner.invoke(
        app,
        ["run", str(test_file), "--report-dir", str(tmp_path / "out"), "--log-file", str(log_file)],
    )

    assert result.exit_code == 0, result.output
    text = log_file.read_text(encoding="utf-8")
    assert "Configuration:" in text
    assert "\033[" not in text
