"""Exception types raised while scanning an archive.

Every error is fatal for the scan: the CLI reports the first one and
writes no report.
"""


class JarEnumError(Exception):
    """Base class for all jarenum errors."""


class ArchiveError(JarEnumError):
    """An archive or one of its entries could not be read."""


class ClassFormatError(JarEnumError):
    """A classfile is malformed (bad magic, truncated data, bad pool index)."""

    def __init__(self, message: str, class_name: str | None = None) -> None:
        self.class_name = class_name
        if class_name:
            message = f"{class_name}: {message}"
        super().__init__(message)


class ClasspathIndexError(JarEnumError):
    """The classpath index entry contains a line that cannot be parsed."""


class FilterError(JarEnumError):
    """A class filter failed to evaluate a candidate name."""


class ConfigError(JarEnumError):
    """Invalid configuration or conflicting options."""
