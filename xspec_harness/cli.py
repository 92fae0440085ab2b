"""
Command-line interface for XSpec Harness.

This module provides a subcommand-based CLI using Typer.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer

from xspec_harness.core.config import Config
from xspec_harness.core.errors import ReportEmissionError, XSpecHarnessError
from xspec_harness.core.logging import setup_logger
from xspec_harness.core.runner import XSpecRunner
from xspec_harness.core.suite import load_suite, suite_from_files

app = typer.Typer(
    name="xspec-harness",
    help="XSpec test harness - Compile, run and report XSpec tests for XSLT stylesheets",
    add_completion=False,
)


def get_config(verbosity: Optional[int] = None, **kwargs) -> Config:
    """Create Config from the config file, then apply explicitly given options."""
    return Config().apply_overrides(verbosity=verbosity, **kwargs)


def collect_tests(files: Optional[List[Path]], suite: Optional[Path]) -> Dict[str, Path]:
    """Merge suite file entries and explicit files, suite first."""
    tests: Dict[str, Path] = {}
    if suite is not None:
        tests.update(load_suite(suite))
    if files:
        for name, path in suite_from_files(files).items():
            if name in tests:
                raise XSpecHarnessError(f"Test '{name}' is defined both in the suite and on the command line")
            tests[name] = path
    return tests


@app.command()
def run(
    files: Optional[List[Path]] = typer.Argument(None, help="XSpec files to run (named after their file stem)"),
    suite: Optional[Path] = typer.Option(None, "--suite", help="YAML suite file listing tests"),
    report_dir: Optional[Path] = typer.Option(None, "--report-dir", help="Directory to save reports"),
    catalog: Optional[List[Path]] = typer.Option(None, "--catalog", help="Default XML catalog (repeatable)"),
    summary: Optional[List[str]] = typer.Option(None, "--summary", help="Run summary formats (json, md)"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write harness logs (down to DEBUG) to this file"),
):
    """Run XSpec tests and write their reports."""
    try:
        config = get_config(
            verbosity=verbosity,
            report_dir=report_dir,
            default_catalogs=catalog or None,
            summary_formats=summary or None,
        )
        setup_logger(verbosity=config.verbosity, log_file=log_file)
        tests = collect_tests(files, suite)
        if not tests:
            typer.echo("✗ No tests given: pass XSpec files or --suite", err=True)
            sys.exit(2)
        results = XSpecRunner(config).run(tests, config.report_dir)
    except ReportEmissionError as e:
        typer.echo(f"✗ Report emission failed: {e}", err=True)
        sys.exit(1)
    except XSpecHarnessError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(2)

    typer.echo("")
    typer.echo(str(results))
    if results.successful:
        typer.echo("✓ All tests passed")
        sys.exit(0)
    typer.echo("✗ Some tests failed", err=True)
    sys.exit(1)


@app.command()
def doctor(
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Run preflight checks (bundled stylesheets, catalogs, report directory)."""
    typer.echo("Running preflight checks...")
    try:
        config = get_config(verbosity=verbosity)
        setup_logger(verbosity=config.verbosity)
        if config.config_file and config.config_file.exists():
            typer.echo(f"✓ Config file: {config.config_file}")
        else:
            typer.echo("✓ No config file, using defaults")

        runner = XSpecRunner(config)
    except XSpecHarnessError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(1)

    typer.echo(f"✓ Bundled resources: {runner.resources.root}")
    typer.echo(f"✓ Default resolver: {runner.default_resolver!r}")
    typer.echo("Effective configuration:")
    for key, value in config.to_dict().items():
        typer.echo(f"  {key} = {value}")

    all_ok = True
    for catalog in config.default_catalogs:
        if not catalog.exists():
            typer.echo(f"⚠ Default catalog not found: {catalog}", err=True)

    report_dir = config.report_dir.resolve()
    parent = report_dir if report_dir.exists() else report_dir.parent
    if parent.exists() and parent.is_dir():
        typer.echo(f"✓ Report directory: {report_dir}")
    else:
        typer.echo(f"✗ Report directory cannot be created: {report_dir}", err=True)
        all_ok = False

    if all_ok:
        typer.echo("\n✓ All preflight checks passed")
        sys.exit(0)
    else:
        typer.echo("\n✗ Some preflight checks failed", err=True)
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
