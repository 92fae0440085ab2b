"""
Transform engine abstraction and its lxml implementation.
"""

from xspec_harness.engine.base import QName, Transform, TransformEngine
from xspec_harness.engine.catalog import CatalogResolver, NullResolver
from xspec_harness.engine.lxml_engine import LxmlEngine, LxmlTransform
from xspec_harness.engine.sinks import DiagnosticSink, LoggingSink, SilentSink, WriterSink

__all__ = [
    "QName",
    "Transform",
    "TransformEngine",
    "CatalogResolver",
    "NullResolver",
    "LxmlEngine",
    "LxmlTransform",
    "DiagnosticSink",
    "LoggingSink",
    "SilentSink",
    "WriterSink",
]
