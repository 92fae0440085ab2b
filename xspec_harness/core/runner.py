"""
XSpec test runner.

For each test the runner compiles the XSpec file into a stylesheet, runs its
``x:main`` template, classifies the outcome and writes the reports. Tests run
one after another; an execution error in one test never stops the batch.
"""

import sys
import time
import traceback
from pathlib import Path
from typing import Mapping, Optional, TextIO

from xspec_harness.core.config import Config
from xspec_harness.core.errors import (
    PathNotFoundError,
    ReportEmissionError,
    ResourceError,
    TransformError,
)
from xspec_harness.core.logging import get_logger
from xspec_harness.core.resources import BundledResources
from xspec_harness.engine import (
    CatalogResolver,
    LoggingSink,
    LxmlEngine,
    NullResolver,
    SilentSink,
    TransformEngine,
    WriterSink,
)
from xspec_harness.reporting.classifier import XSPEC_NS, from_exception, from_report
from xspec_harness.reporting.models import ResultsBuilder, TestResults
from xspec_harness.reporting.summary import SummaryGenerator

MAIN_TEMPLATE = (XSPEC_NS, "main")
CSS_NAME = "xspec-report.css"
CSS_URI_PARAM = "report-css-uri"
JUNIT_NAME_PARAM = "name"
JUNIT_TIME_PARAM = "time"


class XSpecRunner:
    """Runs XSpec tests and writes their reports."""

    def __init__(
        self,
        config: Optional[Config] = None,
        engine: Optional[TransformEngine] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Load the bundled stylesheets and the report CSS.

        Args:
            config: Configuration (defaults to ``Config()``)
            engine: Transform engine (defaults to ``LxmlEngine``)
            stream: Where progress lines are echoed (defaults to stdout)

        Raises:
            ResourceError: If a bundled resource is missing or does not compile
        """
        self.config = config or Config()
        self.engine = engine or LxmlEngine()
        self._stream = stream
        self.logger = get_logger(__name__)

        try:
            self.resources = BundledResources.locate(self.config.resources_dir)
        except PathNotFoundError as e:
            raise ResourceError(str(e)) from e

        self.compiler = self.engine.load(self.resources.compiler)
        self.html_formatter = self.engine.load(self.resources.html_formatter)
        self.junit_formatter = self.engine.load(self.resources.junit_formatter)
        try:
            self.css = self.resources.report_css.read_bytes()
        except OSError as e:
            raise ResourceError(f"Failed to read {self.resources.report_css}: {e}") from e

        if self.config.default_catalogs:
            self.default_resolver = CatalogResolver(self.config.default_catalogs)
        else:
            self.default_resolver = NullResolver()
        self.logger.debug(f"Default resolver: {self.default_resolver!r}")
        self.logger.debug(f"Configuration: {self.config.to_dict()}")

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def run(self, tests: Mapping[str, Path], report_dir: Optional[Path] = None) -> TestResults:
        """
        Run every test in mapping order and aggregate the results.

        Args:
            tests: Test name to XSpec file
            report_dir: Output directory (defaults to ``Config.report_dir``)

        Returns:
            Aggregate result with one sub-result per test

        Raises:
            ReportEmissionError: If a report cannot be written
        """
        report_dir = Path(report_dir if report_dir is not None else self.config.report_dir)
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportEmissionError(f"Cannot create report directory {report_dir}: {e}") from e

        builder = ResultsBuilder("")
        for name, test_file in tests.items():
            builder.add_sub_results(self.run_single(name, Path(test_file), report_dir))
        results = builder.build()

        if self.config.summary_formats:
            generator = SummaryGenerator(report_dir, self.resources.templates_dir)
            try:
                generated = generator.generate(results, self.config.summary_formats)
            except OSError as e:
                raise ReportEmissionError(f"Failed to write run summary: {e}") from e
            for format_type, path in generated.items():
                self.logger.info(f"Wrote {format_type} summary: {path}")

        return results

    def resolve_context(self, test_file: Path):
        """Return the resolver for a test: its sibling catalog if present, else the default."""
        catalog = Path(test_file).resolve().parent / self.config.catalog_name
        if catalog.is_file():
            self.logger.debug(f"Using test catalog {catalog}")
            return CatalogResolver([catalog])
        return self.default_resolver

    def run_single(self, name: str, test_file: Path, report_dir: Path) -> TestResults:
        """
        Run one test and write its reports.

        ``OUT-<name>.txt`` is always written. The XSpec, HTML and JUnit reports
        are only written when the test ran without execution errors.
        """
        test_file = Path(test_file)
        report_dir = Path(report_dir)
        text_report = report_dir / f"OUT-{name}.txt"
        try:
            writer = open(text_report, "w", encoding="utf-8")
        except OSError as e:
            raise ReportEmissionError(f"Cannot open {text_report}: {e}") from e

        with writer:
            sink = WriterSink(writer)
            start = time.perf_counter()
            self._report(f"Running {name}", writer)

            report = None
            failure: Optional[TransformError] = None
            try:
                source = self.engine.parse(test_file)
                compiled = self.engine.apply(self.compiler, source, sink=sink)

                resolver = self.resolve_context(test_file)
                executable = self.engine.compile(compiled, resolver, base_url=test_file.resolve().as_uri())
                report = self.engine.call_template(executable, MAIN_TEMPLATE, sink=sink)
            except TransformError as e:
                self._report(str(e), writer)
                writer.write("".join(traceback.format_exception(type(e), e, e.__traceback__)))
                failure = e

            duration = time.perf_counter() - start
            if failure is None:
                result = from_report(name, report, self.engine, duration)
                if result.errors and result.message:
                    self._report(result.message, writer)
            else:
                result = from_exception(name, failure, duration)
            self._report(str(result), writer)

        if result.errors == 0:
            self._emit_reports(name, report, report_dir, duration)
        return result

    def _emit_reports(self, name: str, report, report_dir: Path, duration: float) -> None:
        try:
            self.engine.serialize(report, report_dir / f"XSPEC-{name}.xml")

            self._write_css(report_dir / CSS_NAME)
            self.engine.apply_to_file(
                self.html_formatter,
                report,
                report_dir / f"HTML-{name}.html",
                params={CSS_URI_PARAM: CSS_NAME},
                sink=SilentSink.INSTANCE,
            )

            self.engine.apply_to_file(
                self.junit_formatter,
                report,
                report_dir / f"TEST-{name}.xml",
                params={JUNIT_NAME_PARAM: name, JUNIT_TIME_PARAM: round(duration, 3)},
                sink=LoggingSink(self.logger),
            )
        except (OSError, TransformError) as e:
            raise ReportEmissionError(f"Failed to write reports for {name}: {e}") from e

    def _write_css(self, path: Path) -> None:
        # Exclusive create: the first test to get here writes it, nobody overwrites it
        try:
            with open(path, "xb") as f:
                f.write(self.css)
        except FileExistsError:
            return
        self.logger.debug(f"Wrote {path}")

    def _report(self, message: str, writer: TextIO) -> None:
        print(message, file=self.stream)
        writer.write(message + "\n")
