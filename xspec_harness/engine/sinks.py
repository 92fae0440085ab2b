"""
Diagnostic sinks for messages reported by the transform engine.

The engine hands every warning, error and ``xsl:message`` to the sink passed
into the call, in the order they were produced.
"""

import logging
from abc import ABC, abstractmethod
from typing import TextIO


class DiagnosticSink(ABC):
    """Receives engine diagnostics for one transform invocation."""

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def message(self, content: str, terminate: bool = False) -> None:
        """Called for ``xsl:message`` output."""
        pass


class WriterSink(DiagnosticSink):
    """Appends every diagnostic as a line to a text stream (the per-test log)."""

    def __init__(self, writer: TextIO):
        self.writer = writer

    def warning(self, message: str) -> None:
        self.writer.write(message + "\n")

    def error(self, message: str) -> None:
        self.writer.write(message + "\n")

    def message(self, content: str, terminate: bool = False) -> None:
        self.writer.write(content + "\n")


class LoggingSink(DiagnosticSink):
    """Forwards diagnostics to a logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def message(self, content: str, terminate: bool = False) -> None:
        self.logger.debug(content)


class SilentSink(DiagnosticSink):
    """Discards everything."""

    INSTANCE: "SilentSink"

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def message(self, content: str, terminate: bool = False) -> None:
        pass


SilentSink.INSTANCE = SilentSink()
