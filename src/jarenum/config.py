"""Configuration loading for jarenum."""

from pathlib import Path

import tomli

from jarenum.archive.layout import ARCHIVE_SUFFIX, CLASS_SUFFIX, CLASSES_ROOT, CLASSPATH_INDEX, ArchiveLayout
from jarenum.classfile.enums import AVRO_GENERATED_DESCRIPTOR
from jarenum.errors import ConfigError

SECTIONS = ("filter", "layout", "classfile")


def load_config(config_path: Path) -> dict:
    """Load a jarenum TOML configuration file."""
    try:
        with open(config_path, "rb") as f:
            config = tomli.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    for name in SECTIONS:
        _section(config, name)
    return config


def _section(config: dict, name: str) -> dict:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config key '{name}' must be a table, got {type(section).__name__}")
    return section


def _string(
    config: dict,
    section_name: str,
    key: str,
    default: str | None = None,
    allow_empty: bool = True,
) -> str | None:
    value = _section(config, section_name).get(key, default)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"Config key '{section_name}.{key}' must be a string, got {type(value).__name__}"
        )
    if not value and not allow_empty:
        raise ConfigError(f"Config key '{section_name}.{key}' must not be empty")
    return value


def get_class_name_regex(config: dict) -> str | None:
    """Get the class name pattern from config."""
    return _string(config, "filter", "class_name_regex")


def get_filter_script(config: dict, base_dir: Path | None = None) -> Path | None:
    """Get the filter script path from config, relative to base_dir."""
    script = _string(config, "filter", "script", allow_empty=False)
    if script is None:
        return None
    path = Path(script)
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def get_layout(config: dict) -> ArchiveLayout:
    """Build the archive layout, falling back to Spring Boot defaults."""
    return ArchiveLayout(
        classes_root=_string(config, "layout", "classes_root", CLASSES_ROOT),
        classpath_index=_string(config, "layout", "classpath_index", CLASSPATH_INDEX, allow_empty=False),
        class_suffix=_string(config, "layout", "class_suffix", CLASS_SUFFIX, allow_empty=False),
        archive_suffix=_string(config, "layout", "archive_suffix", ARCHIVE_SUFFIX, allow_empty=False),
    )


def get_marker_descriptor(config: dict) -> str:
    """Get the annotation descriptor tracked as the marker."""
    return _string(
        config, "classfile", "marker_descriptor", AVRO_GENERATED_DESCRIPTOR, allow_empty=False
    )
