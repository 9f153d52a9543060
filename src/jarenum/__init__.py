"""jarenum - report the enum types packaged inside a Java archive."""

__version__ = "0.1.0"
