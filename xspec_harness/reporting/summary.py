"""
Run summary reports (JSON, Markdown) for a whole batch of XSpec tests.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import jinja2

from xspec_harness.reporting.models import TestResults

SUMMARY_BASENAME = "xspec-summary"
MARKDOWN_TEMPLATE = "summary.md.j2"


class SummaryGenerator:
    """Write batch-level summaries next to the per-test reports."""

    def __init__(self, output_dir: Path, templates_dir: Path):
        self.output_dir = Path(output_dir)
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def generate(
        self,
        results: TestResults,
        formats: List[str],
        generated_at: Optional[datetime] = None,
    ) -> Dict[str, Path]:
        """
        Generate summaries in the requested formats.

        Args:
            results: Aggregate result returned by the runner
            formats: Any of "json", "md"
            generated_at: Timestamp to record (defaults to now)

        Returns:
            Dictionary mapping format to output file path
        """
        generated_at = generated_at or datetime.now()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        generated_files = {}
        for format_type in formats:
            if format_type == "json":
                generated_files["json"] = self._generate_json(results, generated_at)
            elif format_type == "md":
                generated_files["md"] = self._generate_markdown(results, generated_at)
            else:
                raise ValueError(f"Unsupported summary format: {format_type}")
        return generated_files

    def _generate_json(self, results: TestResults, generated_at: datetime) -> Path:
        file_path = self.output_dir / f"{SUMMARY_BASENAME}.json"
        payload = {
            "generated_at": generated_at.isoformat(timespec="seconds"),
            "summary": str(results),
            **results.to_dict(),
        }
        file_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return file_path

    def _generate_markdown(self, results: TestResults, generated_at: datetime) -> Path:
        file_path = self.output_dir / f"{SUMMARY_BASENAME}.md"
        template = self._env.get_template(MARKDOWN_TEMPLATE)
        content = template.render(
            results=results,
            generated_at=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
        file_path.write_text(content, encoding="utf-8")
        return file_path
