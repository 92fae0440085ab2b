"""
Bundled resource discovery.

The XSpec compiler, the report formatters and the report stylesheet ship as
package data under ``xspec_harness/resources``. The location can be
overridden with the ``XSPEC_HARNESS_RESOURCES`` environment variable or
``Config.resources_dir``.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from xspec_harness.core.errors import PathNotFoundError

RESOURCES_ENV_VAR = "XSPEC_HARNESS_RESOURCES"

COMPILER_XSL = "compiler/generate-xspec-tests.xsl"
HTML_FORMATTER_XSL = "reporter/format-xspec-report.xsl"
JUNIT_FORMATTER_XSL = "extra/format-junit-report.xsl"
REPORT_CSS = "reporter/test-report.css"
TEMPLATES_DIR = "templates"


def find_resources_dir(override: Optional[Path] = None) -> Path:
    """
    Locate the bundled resources directory.

    Args:
        override: Explicit directory (takes precedence over the environment)

    Returns:
        Path to the resources directory

    Raises:
        PathNotFoundError: If the directory does not exist
    """
    if override is not None:
        resources_dir = Path(override).resolve()
    elif os.environ.get(RESOURCES_ENV_VAR):
        resources_dir = Path(os.environ[RESOURCES_ENV_VAR]).resolve()
    else:
        resources_dir = Path(__file__).resolve().parent.parent / "resources"

    if not resources_dir.is_dir():
        raise PathNotFoundError(f"Resources directory not found: {resources_dir}")
    return resources_dir


@dataclass(frozen=True)
class BundledResources:
    """Paths to the stylesheets and assets the runner loads at startup."""

    root: Path
    compiler: Path
    html_formatter: Path
    junit_formatter: Path
    report_css: Path
    templates_dir: Path

    @classmethod
    def locate(cls, override: Optional[Path] = None) -> "BundledResources":
        """Resolve every bundled resource, failing on the first missing one."""
        root = find_resources_dir(override)
        paths = {
            "compiler": root / COMPILER_XSL,
            "html_formatter": root / HTML_FORMATTER_XSL,
            "junit_formatter": root / JUNIT_FORMATTER_XSL,
            "report_css": root / REPORT_CSS,
            "templates_dir": root / TEMPLATES_DIR,
        }
        for key, path in paths.items():
            if not path.exists():
                raise PathNotFoundError(f"Bundled resource '{key}' not found: {path}")
        return cls(root=root, **paths)
