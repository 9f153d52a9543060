"""Built-in class filters."""

import re
from pathlib import Path
from typing import Callable

from jarenum.errors import ConfigError, FilterError


class AcceptAllFilter:
    """Accepts every class. Used when no criterion is configured."""

    def accepts(self, class_name: str) -> bool:
        return True


class PatternFilter:
    """Accepts names matched anywhere by a regular expression.

    Without a pattern nothing is accepted.
    """

    def __init__(self, pattern: re.Pattern[str] | None) -> None:
        self.pattern = pattern

    @classmethod
    def compile(cls, pattern: str) -> "PatternFilter":
        try:
            return cls(re.compile(pattern))
        except re.error as e:
            raise ConfigError(f"Invalid class name pattern {pattern!r}: {e}") from e

    def accepts(self, class_name: str) -> bool:
        if self.pattern is None:
            return False
        return self.pattern.search(class_name) is not None


class ScriptedFilter:
    """Delegates the decision to an external predicate."""

    def __init__(self, predicate: Callable[[str], bool], origin: str = "<predicate>") -> None:
        self.predicate = predicate
        self.origin = origin

    def accepts(self, class_name: str) -> bool:
        try:
            result = self.predicate(class_name)
        except Exception as e:
            raise FilterError(
                f"Filter {self.origin} failed on {class_name}: {e}"
            ) from e
        if not isinstance(result, bool):
            raise FilterError(
                f"Filter {self.origin} returned {type(result).__name__} "
                f"for {class_name}, expected bool"
            )
        return result


def build_filter(
    pattern: str | None = None,
    script: Path | None = None,
) -> AcceptAllFilter | PatternFilter | ScriptedFilter:
    """Choose the filter variant from the configured criterion."""
    if pattern is not None and script is not None:
        raise ConfigError("A class name pattern and a filter script are mutually exclusive")

    if pattern is not None:
        return PatternFilter.compile(pattern)

    if script is not None:
        from jarenum.filters.script import load_script_predicate

        return ScriptedFilter(load_script_predicate(script), origin=str(script))

    return AcceptAllFilter()
