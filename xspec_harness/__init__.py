"""
XSpec Harness Package

Compiles and runs XSpec tests for XSLT stylesheets and writes text, XSpec,
HTML and JUnit reports.
"""

__version__ = "0.1.0"

from xspec_harness.core.config import Config
from xspec_harness.core.runner import XSpecRunner
from xspec_harness.reporting.models import ResultsBuilder, TestResults

__all__ = [
    "Config",
    "XSpecRunner",
    "ResultsBuilder",
    "TestResults",
]
