"""
Data models for test results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def format_elapsed(seconds: float) -> str:
    """Human-readable elapsed time, e.g. ``1.234 s`` or ``2 min 3.500 s``."""
    if seconds < 60:
        return f"{seconds:.3f} s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)} min {rest:.3f} s"


@dataclass(frozen=True)
class TestResults:
    """Outcome of one XSpec test, or of a batch of tests.

    Counts always include every descendant, so an aggregate's counts are the
    sums over its ``sub_results``.
    """

    __test__ = False

    name: str
    pending: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    duration: float = 0.0  # seconds
    sub_results: Tuple["TestResults", ...] = ()
    message: Optional[str] = None

    @property
    def total(self) -> int:
        return self.pending + self.passed + self.failed + self.errors

    @property
    def elapsed(self) -> str:
        return format_elapsed(self.duration)

    @property
    def successful(self) -> bool:
        return self.failed == 0 and self.errors == 0

    def __str__(self) -> str:
        label = f"{self.name}: " if self.name else ""
        return (
            f"{label}Tests run: {self.total}, Passed: {self.passed}, Failures: {self.failed}, "
            f"Errors: {self.errors}, Pending: {self.pending}, Time elapsed: {self.elapsed}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding empty fields."""
        result: Dict[str, Any] = {
            "name": self.name,
            "pending": self.pending,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "duration": round(self.duration, 3),
        }
        if self.message is not None:
            result["message"] = self.message
        if self.sub_results:
            result["sub_results"] = [sub.to_dict() for sub in self.sub_results]
        return result


class ResultsBuilder:
    """Mutable accumulator for ``TestResults``.

    ``build()`` snapshots the current state; later changes to the builder do
    not affect results that were already built.
    """

    def __init__(self, name: str):
        self.name = name
        self.pending = 0
        self.passed = 0
        self.failed = 0
        self.errors = 0
        self.duration = 0.0
        self.message: Optional[str] = None
        self._sub_results: List[TestResults] = []

    def add_sub_results(self, child: TestResults) -> "ResultsBuilder":
        """Append ``child`` and add its counts to the running totals."""
        self._sub_results.append(child)
        self.pending += child.pending
        self.passed += child.passed
        self.failed += child.failed
        self.errors += child.errors
        self.duration += child.duration
        return self

    def with_counts(self, pending: int = 0, passed: int = 0, failed: int = 0, errors: int = 0) -> "ResultsBuilder":
        """Add leaf-level outcome counts."""
        for label, value in (("pending", pending), ("passed", passed), ("failed", failed), ("errors", errors)):
            if value < 0:
                raise ValueError(f"{label} must be non-negative, got {value}")
        self.pending += pending
        self.passed += passed
        self.failed += failed
        self.errors += errors
        return self

    def with_duration(self, seconds: float) -> "ResultsBuilder":
        self.duration = seconds
        return self

    def with_message(self, message: Optional[str]) -> "ResultsBuilder":
        self.message = message
        return self

    def build(self) -> TestResults:
        return TestResults(
            name=self.name,
            pending=self.pending,
            passed=self.passed,
            failed=self.failed,
            errors=self.errors,
            duration=self.duration,
            sub_results=tuple(self._sub_results),
            message=self.message,
        )
