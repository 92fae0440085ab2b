"""
Configuration management for XSpec Harness.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field

from xspec_harness.core.errors import ConfigurationError

CONFIG_FILE_NAME = "xspec_harness.toml"
CONFIG_ENV_VAR = "XSPEC_HARNESS_CONFIG"

SUMMARY_FORMATS = frozenset({"json", "md"})


@dataclass
class Config:
    """Configuration class for XSpec Harness."""

    config_file: Optional[Path] = None

    # Reporting
    report_dir: Path = Path("xspec-reports")
    summary_formats: List[str] = field(default_factory=list)

    # Resolution
    default_catalogs: List[Path] = field(default_factory=list)
    catalog_name: str = "catalog.xml"

    # Bundled stylesheets override (defaults to the packaged resources)
    resources_dir: Optional[Path] = None

    verbosity: int = 0  # 0=minimal, 1=progress, 2=engine diagnostics, 3=debug

    def __post_init__(self):
        """Post-initialization processing."""
        self._load_config_file()
        self._normalize()

    def apply_overrides(self, **overrides: Any) -> "Config":
        """Set explicitly given values (None means not given) on top of the file defaults."""
        for key, value in overrides.items():
            if key not in self.__dataclass_fields__:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            if value is None:
                continue
            setattr(self, key, value)
        self._normalize()
        return self

    def _normalize(self) -> None:
        self.report_dir = Path(self.report_dir)
        self.default_catalogs = [Path(c) for c in self.default_catalogs]
        if self.resources_dir is not None:
            self.resources_dir = Path(self.resources_dir).resolve()

        if not 0 <= self.verbosity <= 3:
            raise ConfigurationError(f"verbosity must be between 0 and 3, got {self.verbosity}")

        unknown = sorted(set(self.summary_formats) - SUMMARY_FORMATS)
        if unknown:
            raise ConfigurationError(
                f"Unknown summary format(s): {', '.join(unknown)}. "
                f"Expected one of: {', '.join(sorted(SUMMARY_FORMATS))}"
            )

        if not self.catalog_name or Path(self.catalog_name).name != self.catalog_name:
            raise ConfigurationError(f"catalog_name must be a plain file name, got {self.catalog_name!r}")

    def _load_config_file(self) -> None:
        """Load defaults from xspec_harness.toml if present."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is None:
            self.config_file = Path.cwd() / CONFIG_FILE_NAME
        else:
            self.config_file = Path(self.config_file).resolve()

        if not self.config_file.exists():
            if env_path:
                raise ConfigurationError(f"{CONFIG_ENV_VAR} points to a missing file: {env_path}")
            return

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.9-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text(encoding="utf-8"))
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        table = data.get("xspec_harness") or data.get("tool", {}).get("xspec_harness", {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[xspec_harness] in {self.config_file} must be a table")

        base = self.config_file.parent
        for key, value in table.items():
            if key == "config_file" or not hasattr(self, key):
                continue
            if value is None:
                continue
            if key in ("report_dir", "resources_dir"):
                value = base / value
            elif key == "default_catalogs":
                value = [base / c for c in value]
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "config_file": str(self.config_file) if self.config_file else None,
            "report_dir": str(self.report_dir),
            "summary_formats": list(self.summary_formats),
            "default_catalogs": [str(c) for c in self.default_catalogs],
            "catalog_name": self.catalog_name,
            "resources_dir": str(self.resources_dir) if self.resources_dir else None,
            "verbosity": self.verbosity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for key in ("config_file", "report_dir", "resources_dir"):
            if isinstance(data.get(key), str):
                data[key] = Path(data[key])
        return cls(**data)
