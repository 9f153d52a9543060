"""Loading filter predicates from Python scripts.

A filter script is a plain Python file defining::

    def accepts(class_name: str) -> bool:
        return class_name.startswith("com/example/")
"""

import importlib.util
from pathlib import Path
from typing import Callable

from jarenum.errors import FilterError

PREDICATE_NAME = "accepts"


def load_script_predicate(script_path: Path) -> Callable[[str], bool]:
    """Import a filter script and return its ``accepts`` function."""
    if not script_path.is_file():
        raise FilterError(f"Filter script not found: {script_path}")

    module_name = f"jarenum_filter_{script_path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, script_path)
    if spec is None or spec.loader is None:
        raise FilterError(f"Cannot load filter script: {script_path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise FilterError(f"Filter script {script_path} failed to load: {e}") from e

    predicate = getattr(module, PREDICATE_NAME, None)
    if not callable(predicate):
        raise FilterError(
            f"Filter script {script_path} must define a callable '{PREDICATE_NAME}(class_name)'"
        )
    return predicate
