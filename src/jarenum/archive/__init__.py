"""Archive walking and Spring Boot layout handling."""

from jarenum.archive.classpath_index import parse_classpath_index
from jarenum.archive.layout import DEFAULT_LAYOUT, ArchiveLayout
from jarenum.archive.traversal import ArchiveTraverser, scan_archive, traverse

__all__ = [
    "DEFAULT_LAYOUT",
    "ArchiveLayout",
    "ArchiveTraverser",
    "parse_classpath_index",
    "scan_archive",
    "traverse",
]
