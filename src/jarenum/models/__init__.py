"""Data models for jarenum."""

from jarenum.models.report import (
    ROOT_SOURCE,
    ArchiveEntry,
    EnumInfo,
    EnumRecord,
    EnumReport,
    Provenance,
    ScanMetadata,
    ScanStats,
)

__all__ = [
    "ROOT_SOURCE",
    "ArchiveEntry",
    "EnumInfo",
    "EnumRecord",
    "EnumReport",
    "Provenance",
    "ScanMetadata",
    "ScanStats",
]
