"""
Transform engine interface.

The harness never touches XSLT internals directly: everything that parses,
compiles or runs a stylesheet goes through a ``TransformEngine``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from xspec_harness.engine.sinks import DiagnosticSink

# (namespace URI, local name)
QName = Tuple[str, str]


class Transform(ABC):
    """A compiled stylesheet that can be invoked many times."""

    @property
    @abstractmethod
    def base_url(self) -> Optional[str]:
        """URL relative references inside the stylesheet resolve against."""
        pass


class TransformEngine(ABC):
    """Parses documents and compiles/applies XSLT transforms.

    All failures are raised as ``TransformError``.
    """

    @abstractmethod
    def load(self, path: Path) -> Transform:
        """Compile a stylesheet file. Raises ``ResourceError`` if it cannot be loaded."""
        pass

    @abstractmethod
    def parse(self, path: Path, resolver: Any = None) -> Any:
        """Parse an XML document from a file."""
        pass

    @abstractmethod
    def compile(self, document: Any, resolver: Any = None, base_url: Optional[str] = None) -> Transform:
        """Compile a stylesheet document, attaching ``resolver`` for imports and ``document()``."""
        pass

    @abstractmethod
    def apply(
        self,
        transform: Transform,
        source: Any,
        params: Optional[Mapping[str, Any]] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> Any:
        """Apply ``transform`` to ``source`` and return the result document."""
        pass

    @abstractmethod
    def apply_to_file(
        self,
        transform: Transform,
        source: Any,
        destination: Path,
        params: Optional[Mapping[str, Any]] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> Path:
        """Apply ``transform`` and serialise the result to ``destination`` using its output method."""
        pass

    @abstractmethod
    def call_template(self, transform: Transform, template: QName, sink: Optional[DiagnosticSink] = None) -> Any:
        """Run ``transform`` starting from the named initial template."""
        pass

    @abstractmethod
    def count(self, document: Any, expression: str, namespaces: Mapping[str, str]) -> int:
        """Return the number of nodes selected by ``expression``."""
        pass

    @abstractmethod
    def serialize(self, document: Any, destination: Path) -> Path:
        """Write ``document`` to ``destination`` as UTF-8 XML."""
        pass
