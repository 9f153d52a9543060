"""Class name filters deciding which classfiles get parsed."""

from jarenum.filters.builtin import AcceptAllFilter, PatternFilter, ScriptedFilter, build_filter
from jarenum.filters.protocol import ClassFilter
from jarenum.filters.script import load_script_predicate

__all__ = [
    "AcceptAllFilter",
    "ClassFilter",
    "PatternFilter",
    "ScriptedFilter",
    "build_filter",
    "load_script_predicate",
]
