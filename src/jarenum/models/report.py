"""Data models for enum scan results."""

from dataclasses import dataclass, field
from datetime import datetime


ROOT_SOURCE = "root"


@dataclass(frozen=True)
class Provenance:
    """Which archive a classfile was physically read from.

    ``archive`` is None for the root archive, otherwise the nested archive's
    entry name as it appeared in its immediate parent.
    """

    archive: str | None = None

    @classmethod
    def root(cls) -> "Provenance":
        return cls()

    @classmethod
    def nested(cls, entry_name: str) -> "Provenance":
        return cls(archive=entry_name)

    @property
    def is_root(self) -> bool:
        return self.archive is None

    def __str__(self) -> str:
        return ROOT_SOURCE if self.archive is None else self.archive


@dataclass(frozen=True)
class ArchiveEntry:
    """A zip entry selected for processing.

    ``name`` is the entry name after layout normalization, ``entry_name`` the
    name as stored in the zip. ``nested`` marks an archive to recurse into
    rather than a classfile.
    """

    entry_name: str
    name: str
    payload: bytes
    nested: bool


@dataclass(frozen=True)
class EnumInfo:
    """What the classfile reader learned about one enum type."""

    class_name: str
    members: tuple[str, ...]
    marker_present: bool


@dataclass(frozen=True)
class EnumRecord:
    """One enum type in the final report."""

    class_name: str
    members: tuple[str, ...]
    marker_present: bool
    source: Provenance

    def to_dict(self) -> dict:
        return {
            "class_name": self.class_name,
            "members": list(self.members),
            "avro_generated": self.marker_present,
            "source": str(self.source),
        }


@dataclass
class ScanStats:
    """Counters collected while walking an archive tree."""

    archives_visited: int = 0
    classes_accepted: int = 0
    classes_rejected: int = 0
    enums_found: int = 0
    duplicates_dropped: int = 0
    index_entries_missing: int = 0

    def to_dict(self) -> dict:
        return {
            "archives_visited": self.archives_visited,
            "classes_accepted": self.classes_accepted,
            "classes_rejected": self.classes_rejected,
            "enums_found": self.enums_found,
            "duplicates_dropped": self.duplicates_dropped,
            "index_entries_missing": self.index_entries_missing,
        }


@dataclass
class ScanMetadata:
    """Metadata about the scan run."""

    archive: str
    scanned_at: datetime
    jarenum_version: str
    duration_ms: int
    stats: ScanStats = field(default_factory=ScanStats)

    def to_dict(self) -> dict:
        return {
            "archive": self.archive,
            "scanned_at": self.scanned_at.isoformat(),
            "jarenum_version": self.jarenum_version,
            "duration_ms": self.duration_ms,
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class EnumReport:
    """Ordered, deduplicated collection of enum records."""

    version: str = "1.0"
    metadata: ScanMetadata | None = None
    records: tuple[EnumRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def class_names(self) -> list[str]:
        return [record.class_name for record in self.records]

    def to_dict(self) -> dict:
        result: dict = {"version": self.version}

        if self.metadata:
            result["metadata"] = self.metadata.to_dict()

        result["enums"] = [record.to_dict() for record in self.records]

        return result
