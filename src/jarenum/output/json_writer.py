"""JSON output for enum reports."""

import json
from pathlib import Path

from jarenum.models.report import EnumReport


def report_to_json(report: EnumReport) -> str:
    """Render a report as indented JSON text."""
    return json.dumps(report.to_dict(), indent=2)


def write_report(report: EnumReport, output_path: Path) -> None:
    """Write the report JSON file."""
    data = report.to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_report(report_path: Path) -> dict:
    """Load a report JSON file."""
    with open(report_path, "r", encoding="utf-8") as f:
        return json.load(f)
