"""
Custom exceptions for XSpec Harness.
"""


class XSpecHarnessError(Exception):
    """Base exception for all XSpec Harness errors."""
    pass


class ConfigurationError(XSpecHarnessError):
    """Raised when configuration is invalid."""
    pass


class PathNotFoundError(XSpecHarnessError):
    """Raised when a required path does not exist."""
    pass


class ResourceError(XSpecHarnessError):
    """Raised when a bundled stylesheet or asset cannot be loaded."""
    pass


class SuiteError(XSpecHarnessError):
    """Raised when a test suite definition is invalid."""
    pass


class TransformError(XSpecHarnessError):
    """Raised when the transform engine fails to parse, compile or run."""
    pass


class CatalogError(TransformError):
    """Raised when an XML catalog cannot be read."""
    pass


class ReportEmissionError(XSpecHarnessError):
    """Raised when a report file cannot be written. Aborts the whole run."""
    pass
