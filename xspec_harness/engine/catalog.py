"""
OASIS XML catalog resolution.

A ``CatalogResolver`` maps URIs, system and public identifiers to local
resources while a stylesheet is compiled or run. Catalogs are read once, when
the resolver is created; the resolver itself is never modified afterwards.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from lxml import etree

from xspec_harness.core.errors import CatalogError
from xspec_harness.core.logging import get_logger

CATALOG_NS = "urn:oasis:names:tc:entity:xmlns:xml:catalog"
XML_BASE = "{http://www.w3.org/XML/1998/namespace}base"

logger = get_logger(__name__)

# entry kind -> (identifier attribute, target attribute)
_ENTRY_ATTRIBUTES = {
    "uri": ("name", "uri"),
    "system": ("systemId", "uri"),
    "public": ("publicId", "uri"),
    "rewriteURI": ("uriStartString", "rewritePrefix"),
    "rewriteSystem": ("systemIdStartString", "rewritePrefix"),
}


def _to_location(uri: str) -> str:
    """Turn a file: URI into a filesystem path; leave other URIs alone."""
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return url2pathname(parsed.path)
    return uri


class NullResolver(etree.Resolver):
    """Resolves nothing, so the engine falls back to its native resolution."""

    catalog_files: Tuple[Path, ...] = ()

    def resolve(self, system_url, public_id, context):
        return None

    def __repr__(self) -> str:
        return "NullResolver()"


class CatalogResolver(etree.Resolver):
    """Resolver backed by one or more OASIS XML catalog files."""

    def __init__(self, catalog_files: Iterable[Path], ignore_missing: bool = True):
        super().__init__()
        self.catalog_files = tuple(Path(c).resolve() for c in catalog_files)
        self.ignore_missing = ignore_missing
        self._uris: Dict[str, str] = {}
        self._systems: Dict[str, str] = {}
        self._publics: Dict[str, str] = {}
        self._uri_rewrites: List[Tuple[str, str]] = []
        self._system_rewrites: List[Tuple[str, str]] = []

        seen: Set[Path] = set()
        for catalog in self.catalog_files:
            self._load(catalog, seen)

    def __repr__(self) -> str:
        files = ", ".join(str(c) for c in self.catalog_files)
        return f"CatalogResolver([{files}])"

    def _load(self, catalog: Path, seen: Set[Path]) -> None:
        if catalog in seen:
            return
        seen.add(catalog)

        if not catalog.exists():
            if self.ignore_missing:
                logger.warning(f"Ignoring missing XML catalog: {catalog}")
                return
            raise CatalogError(f"XML catalog not found: {catalog}")

        try:
            root = etree.parse(str(catalog)).getroot()
        except (etree.XMLSyntaxError, OSError) as e:
            raise CatalogError(f"Failed to read XML catalog {catalog}: {e}") from e

        if root.tag != f"{{{CATALOG_NS}}}catalog":
            raise CatalogError(f"Not an OASIS XML catalog: {catalog} (root element {root.tag})")

        base = catalog.as_uri()
        if root.get(XML_BASE):
            base = urljoin(base, root.get(XML_BASE))
        self._load_entries(root, base, seen)

    def _load_entries(self, parent, base: str, seen: Set[Path]) -> None:
        for entry in parent:
            if not isinstance(entry.tag, str) or not entry.tag.startswith(f"{{{CATALOG_NS}}}"):
                continue
            kind = etree.QName(entry).localname
            entry_base = urljoin(base, entry.get(XML_BASE)) if entry.get(XML_BASE) else base

            if kind == "group":
                self._load_entries(entry, entry_base, seen)
                continue
            if kind == "nextCatalog":
                next_uri = urljoin(entry_base, self._required(entry, "catalog"))
                self._load(Path(_to_location(next_uri)).resolve(), seen)
                continue
            if kind not in _ENTRY_ATTRIBUTES:
                continue

            key_attr, value_attr = _ENTRY_ATTRIBUTES[kind]
            key = self._required(entry, key_attr)
            value = urljoin(entry_base, self._required(entry, value_attr))
            if kind == "uri":
                self._uris.setdefault(key, value)
            elif kind == "system":
                self._systems.setdefault(key, value)
            elif kind == "public":
                self._publics.setdefault(key, value)
            elif kind == "rewriteURI":
                self._uri_rewrites.append((key, value))
            else:
                self._system_rewrites.append((key, value))

    @staticmethod
    def _required(entry, attribute: str) -> str:
        value = entry.get(attribute)
        if value is None:
            raise CatalogError(
                f"Catalog entry <{etree.QName(entry).localname}> on line {entry.sourceline} "
                f"is missing the '{attribute}' attribute"
            )
        return value

    @staticmethod
    def _rewrite(identifier: str, rewrites: List[Tuple[str, str]]) -> Optional[str]:
        # Longest matching prefix wins
        best = None
        for prefix, replacement in rewrites:
            if prefix and identifier.startswith(prefix):
                if best is None or len(prefix) > len(best[0]):
                    best = (prefix, replacement)
        if best is None:
            return None
        return best[1] + identifier[len(best[0]):]

    def lookup(self, system_url: Optional[str], public_id: Optional[str] = None) -> Optional[str]:
        """Return the catalog mapping for a reference, or None."""
        if system_url:
            for table in (self._uris, self._systems):
                if system_url in table:
                    return table[system_url]
            for rewrites in (self._uri_rewrites, self._system_rewrites):
                rewritten = self._rewrite(system_url, rewrites)
                if rewritten is not None:
                    return rewritten
        if public_id and public_id in self._publics:
            return self._publics[public_id]
        return None

    def resolve(self, system_url, public_id, context):
        target = self.lookup(system_url, public_id)
        if target is None:
            return None
        logger.debug(f"Catalog resolved {system_url or public_id} -> {target}")
        return self.resolve_filename(_to_location(target), context)
