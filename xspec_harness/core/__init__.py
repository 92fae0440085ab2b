"""
Core modules for XSpec Harness.
"""

from xspec_harness.core.config import Config
from xspec_harness.core.resources import BundledResources, find_resources_dir
from xspec_harness.core.suite import load_suite, suite_from_files
from xspec_harness.core.errors import (
    XSpecHarnessError,
    ConfigurationError,
    PathNotFoundError,
    ResourceError,
    SuiteError,
    TransformError,
    CatalogError,
    ReportEmissionError,
)

__all__ = [
    "Config",
    "BundledResources",
    "find_resources_dir",
    "load_suite",
    "suite_from_files",
    "XSpecHarnessError",
    "ConfigurationError",
    "PathNotFoundError",
    "ResourceError",
    "SuiteError",
    "TransformError",
    "CatalogError",
    "ReportEmissionError",
]
