"""Output modules for CLI display and file writing."""

from jarenum.output.json_writer import load_report, report_to_json, write_report
from jarenum.output.tree import build_report_tree, build_summary_tree, display_tree

__all__ = [
    "build_report_tree",
    "build_summary_tree",
    "display_tree",
    "load_report",
    "report_to_json",
    "write_report",
]
