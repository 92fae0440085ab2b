"""
Transform engine backed by lxml (libxml2/libxslt).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from lxml import etree

from xspec_harness.core.errors import ResourceError, TransformError
from xspec_harness.core.logging import get_logger
from xspec_harness.engine.base import QName, Transform, TransformEngine
from xspec_harness.engine.sinks import DiagnosticSink, SilentSink

XSL_NS = "http://www.w3.org/1999/XSL/Transform"
STYLESHEET_TAGS = (f"{{{XSL_NS}}}stylesheet", f"{{{XSL_NS}}}transform")

INITIAL_NS = "urn:x-xspec-harness:initial-template"
START_DOCUMENT = f'<it:start xmlns:it="{INITIAL_NS}"/>'.encode()

# Errors lxml raises for unreadable, malformed or failing documents
ENGINE_ERRORS = (etree.LxmlError, OSError, ValueError)


@dataclass
class LxmlTransform(Transform):
    """Compiled stylesheet plus what is needed to recompile it with a driver template."""

    xslt: etree.XSLT
    source: bytes
    url: Optional[str]
    parser: etree.XMLParser

    @property
    def base_url(self) -> Optional[str]:
        return self.url


class LxmlEngine(TransformEngine):
    """XSLT 1.0 engine (with EXSLT) built on lxml."""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._queries: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], etree.XPath] = {}

    @staticmethod
    def _parser(resolver: Any = None) -> etree.XMLParser:
        parser = etree.XMLParser()
        if resolver is not None:
            parser.resolvers.add(resolver)
        return parser

    def load(self, path: Path) -> LxmlTransform:
        path = Path(path)
        parser = self._parser()
        try:
            tree = etree.parse(str(path), parser)
            xslt = etree.XSLT(tree)
        except ENGINE_ERRORS as e:
            raise ResourceError(f"Failed to load stylesheet {path}: {e}") from e
        self.logger.debug(f"Loaded stylesheet {path}")
        return LxmlTransform(xslt=xslt, source=etree.tostring(tree), url=path.resolve().as_uri(), parser=parser)

    def parse(self, path: Path, resolver: Any = None):
        try:
            return etree.parse(str(path), self._parser(resolver))
        except ENGINE_ERRORS as e:
            raise TransformError(f"Failed to parse {path}: {e}") from e

    def compile(self, document, resolver: Any = None, base_url: Optional[str] = None) -> LxmlTransform:
        # Re-parse so the stylesheet carries the resolver and base URL
        parser = self._parser(resolver)
        try:
            source = etree.tostring(document)
            root = etree.fromstring(source, parser, base_url=base_url)
            xslt = etree.XSLT(root.getroottree())
        except ENGINE_ERRORS as e:
            raise TransformError(f"Failed to compile stylesheet: {e}") from e
        return LxmlTransform(xslt=xslt, source=source, url=base_url, parser=parser)

    def apply(
        self,
        transform: LxmlTransform,
        source,
        params: Optional[Mapping[str, Any]] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        sink = sink or SilentSink.INSTANCE
        xslt_params = self._xslt_params(params or {})
        try:
            result = transform.xslt(source, **xslt_params)
        except ENGINE_ERRORS as e:
            self._report(transform.xslt.error_log, sink)
            raise TransformError(f"Transformation failed: {e}") from e
        self._report(transform.xslt.error_log, sink)
        return result

    def apply_to_file(
        self,
        transform: LxmlTransform,
        source,
        destination: Path,
        params: Optional[Mapping[str, Any]] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> Path:
        result = self.apply(transform, source, params=params, sink=sink)
        # bytes() honours the stylesheet's xsl:output
        Path(destination).write_bytes(bytes(result))
        return Path(destination)

    def call_template(self, transform: LxmlTransform, template: QName, sink: Optional[DiagnosticSink] = None):
        namespace, name = template
        try:
            root = etree.fromstring(transform.source, transform.parser, base_url=transform.base_url)
        except ENGINE_ERRORS as e:
            raise TransformError(f"Failed to prepare stylesheet: {e}") from e
        if root.tag not in STYLESHEET_TAGS:
            raise TransformError(f"Cannot call a named template on a simplified stylesheet ({root.tag})")

        # libxslt has no initial-template API: add a root template that calls it
        # when run on the start document and defers to the imports otherwise
        initial = etree.SubElement(root, f"{{{XSL_NS}}}template", match="/")
        choose = etree.SubElement(initial, f"{{{XSL_NS}}}choose")
        when = etree.SubElement(choose, f"{{{XSL_NS}}}when", test="it:start", nsmap={"it": INITIAL_NS})
        if namespace:
            etree.SubElement(when, f"{{{XSL_NS}}}call-template", name=f"ct:{name}", nsmap={"ct": namespace})
        else:
            etree.SubElement(when, f"{{{XSL_NS}}}call-template", name=name)
        otherwise = etree.SubElement(choose, f"{{{XSL_NS}}}otherwise")
        etree.SubElement(otherwise, f"{{{XSL_NS}}}apply-imports")

        try:
            driver = LxmlTransform(
                xslt=etree.XSLT(root.getroottree()),
                source=transform.source,
                url=transform.base_url,
                parser=transform.parser,
            )
            start = etree.fromstring(START_DOCUMENT, transform.parser).getroottree()
        except ENGINE_ERRORS as e:
            raise TransformError(f"Failed to compile initial template {{{namespace}}}{name}: {e}") from e
        return self.apply(driver, start, sink=sink)

    def count(self, document, expression: str, namespaces: Mapping[str, str]) -> int:
        if hasattr(document, "getroot") and document.getroot() is None:
            return 0
        key = (expression, tuple(sorted(namespaces.items())))
        query = self._queries.get(key)
        if query is None:
            try:
                query = etree.XPath(f"count({expression})", namespaces=dict(namespaces))
            except etree.XPathSyntaxError as e:
                raise TransformError(f"Invalid XPath expression {expression!r}: {e}") from e
            self._queries[key] = query
        return int(query(document))

    def serialize(self, document, destination: Path) -> Path:
        Path(destination).write_bytes(etree.tostring(document, encoding="UTF-8", xml_declaration=True))
        return Path(destination)

    @staticmethod
    def _xslt_params(params: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert Python values to XPath expressions for stylesheet parameters."""
        converted = {}
        for name, value in params.items():
            if isinstance(value, bool):
                converted[name] = "true()" if value else "false()"
            elif isinstance(value, float):
                # XPath 1.0 has no exponent notation
                converted[name] = format(value, "f")
            elif isinstance(value, int):
                converted[name] = str(value)
            else:
                converted[name] = etree.XSLT.strparam(str(value))
        return converted

    @staticmethod
    def _report(error_log, sink: DiagnosticSink) -> None:
        for entry in error_log:
            if entry.level_name == "WARNING":
                sink.warning(entry.message)
            elif entry.level_name in ("ERROR", "FATAL"):
                sink.error(entry.message)
            else:
                sink.message(entry.message)
