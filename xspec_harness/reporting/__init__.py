"""
Test reporting module for XSpec Harness.

This module provides:
- Test result data structures and their builder
- Classification of XSpec report documents
- Batch summary generation (JSON, Markdown)
"""

from xspec_harness.reporting.models import ResultsBuilder, TestResults
from xspec_harness.reporting.classifier import from_exception, from_report
from xspec_harness.reporting.summary import SummaryGenerator

__all__ = [
    "ResultsBuilder",
    "TestResults",
    "from_exception",
    "from_report",
    "SummaryGenerator",
]
