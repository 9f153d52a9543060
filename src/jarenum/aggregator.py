"""Collects extracted enums into a single deduplicated report."""

import logging

from jarenum.models.report import (
    EnumInfo,
    EnumRecord,
    EnumReport,
    Provenance,
    ScanMetadata,
    ScanStats,
)

logger = logging.getLogger(__name__)


class EnumAggregator:
    """Append-only collector keyed by class name; first occurrence wins."""

    def __init__(self, stats: ScanStats | None = None) -> None:
        self._records: list[EnumRecord] = []
        self._seen: dict[str, Provenance] = {}
        self.stats = stats if stats is not None else ScanStats()

    def record(self, info: EnumInfo, source: Provenance) -> None:
        """Add an enum unless a record with the same class name exists."""
        first_source = self._seen.get(info.class_name)
        if first_source is not None:
            self.stats.duplicates_dropped += 1
            logger.warning(
                "Duplicate enum %s in %s ignored (already recorded from %s)",
                info.class_name,
                source,
                first_source,
            )
            return

        self._seen[info.class_name] = source
        self._records.append(
            EnumRecord(
                class_name=info.class_name,
                members=info.members,
                marker_present=info.marker_present,
                source=source,
            )
        )
        self.stats.enums_found += 1
        logger.debug("Recorded enum %s from %s", info.class_name, source)

    def __contains__(self, class_name: str) -> bool:
        return class_name in self._seen

    def report(self, metadata: ScanMetadata | None = None) -> EnumReport:
        """Return a read-only snapshot of the records collected so far."""
        return EnumReport(metadata=metadata, records=tuple(self._records))
