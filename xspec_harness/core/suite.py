"""
Test suite definitions.

A suite is an ordered mapping of test name to XSpec file. It comes either from
a YAML suite file or from files named on the command line; nothing is
discovered implicitly.

Suite file format::

    tests:
      arithmetic: tests/arithmetic.xspec
      strings: tests/strings.xspec

or, when the order should read top to bottom as a list::

    tests:
      - name: arithmetic
        path: tests/arithmetic.xspec
"""

import re
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import yaml

from xspec_harness.core.errors import SuiteError

NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def _check_name(name, source: str) -> str:
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise SuiteError(f"Invalid test name {name!r} in {source}: use letters, digits, '.', '_' or '-'")
    return name


def _build(entries: Iterable[Tuple[str, Path]], source: str) -> Dict[str, Path]:
    tests: Dict[str, Path] = {}
    for name, path in entries:
        _check_name(name, source)
        if name in tests:
            raise SuiteError(f"Duplicate test name '{name}' in {source}")
        if not path.is_file():
            raise SuiteError(f"Test file for '{name}' not found: {path}")
        tests[name] = path
    return tests


def load_suite(suite_file: Path) -> Dict[str, Path]:
    """
    Load a YAML suite file.

    Args:
        suite_file: Path to the suite file

    Returns:
        Ordered dictionary of test name to XSpec file (absolute)

    Raises:
        SuiteError: If the file is unreadable or the definition is invalid
    """
    suite_file = Path(suite_file).resolve()
    try:
        data = yaml.safe_load(suite_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise SuiteError(f"Failed to read suite file {suite_file}: {e}") from e
    except yaml.YAMLError as e:
        raise SuiteError(f"Invalid YAML in suite file {suite_file}: {e}") from e

    if not isinstance(data, dict) or "tests" not in data:
        raise SuiteError(f"Suite file {suite_file} must contain a 'tests' key")

    base = suite_file.parent
    raw = data["tests"]
    entries: List[Tuple[str, Path]] = []
    if isinstance(raw, dict):
        for name, path in raw.items():
            if not isinstance(path, str):
                raise SuiteError(f"Path for test {name!r} in {suite_file} must be a string")
            entries.append((name, (base / path).resolve()))
    elif isinstance(raw, list):
        for index, item in enumerate(raw):
            if not isinstance(item, dict) or not isinstance(item.get("path"), str) or "name" not in item:
                raise SuiteError(f"Entry {index} in {suite_file} must have 'name' and 'path'")
            entries.append((item["name"], (base / item["path"]).resolve()))
    else:
        raise SuiteError(f"'tests' in {suite_file} must be a mapping or a list")

    return _build(entries, str(suite_file))


def suite_from_files(files: Iterable[Path]) -> Dict[str, Path]:
    """Build a suite from explicit files, naming each test after its file stem."""
    return _build(((Path(f).stem, Path(f).resolve()) for f in files), "command line")
