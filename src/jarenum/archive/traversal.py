"""Recursive walk over an archive and the archives nested inside it."""

import io
import logging
import time
import zipfile
import zlib
from datetime import datetime
from pathlib import Path
from typing import Iterator

from jarenum import __version__
from jarenum.aggregator import EnumAggregator
from jarenum.archive.classpath_index import parse_classpath_index
from jarenum.archive.layout import DEFAULT_LAYOUT, ArchiveLayout
from jarenum.classfile.enums import EnumExtractor
from jarenum.errors import ArchiveError, ClassFormatError
from jarenum.filters.builtin import AcceptAllFilter
from jarenum.filters.protocol import ClassFilter
from jarenum.models.report import ArchiveEntry, EnumReport, Provenance, ScanMetadata, ScanStats

logger = logging.getLogger(__name__)

# Failures zipfile can surface while opening or inflating data.
_ZIP_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, OSError, NotImplementedError, RuntimeError)


class ArchiveTraverser:
    """Depth-first walk that feeds enum classes to an aggregator.

    At the root, entries under the classes root are reported by their
    stripped names and, when a classpath index is present, nested archives
    are visited in the order it lists.
    """

    def __init__(
        self,
        class_filter: ClassFilter,
        aggregator: EnumAggregator,
        extractor: EnumExtractor | None = None,
        layout: ArchiveLayout = DEFAULT_LAYOUT,
    ) -> None:
        self.class_filter = class_filter
        self.aggregator = aggregator
        self.extractor = extractor or EnumExtractor()
        self.layout = layout

    @property
    def stats(self) -> ScanStats:
        return self.aggregator.stats

    def traverse(self, archive_bytes: bytes, provenance: Provenance) -> None:
        """Process every relevant entry of one archive, recursing into nested ones."""
        archive = self._open(archive_bytes, provenance)
        with archive:
            self.stats.archives_visited += 1
            for info in self._entries(archive, provenance):
                self._visit(archive, info, provenance)

    def _open(self, archive_bytes: bytes, provenance: Provenance) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(io.BytesIO(archive_bytes))
        except _ZIP_ERRORS as e:
            raise ArchiveError(f"Cannot open archive {provenance}: {e}") from e

    def _read(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, provenance: Provenance) -> bytes:
        try:
            return archive.read(info)
        except _ZIP_ERRORS as e:
            raise ArchiveError(f"Cannot read {info.filename} in {provenance}: {e}") from e

    def _entries(self, archive: zipfile.ZipFile, provenance: Provenance) -> Iterator[zipfile.ZipInfo]:
        index_info = None
        if provenance.is_root:
            try:
                index_info = archive.getinfo(self.layout.classpath_index)
            except KeyError:
                pass

        if index_info is None:
            logger.debug("Walking %s in archive order", provenance)
            yield from archive.infolist()
            return

        logger.debug("Walking %s in classpath index order", provenance)
        for info in archive.infolist():
            if info.filename.startswith(self.layout.classes_root):
                yield info

        listed = parse_classpath_index(
            self._read(archive, index_info, provenance),
            source=self.layout.classpath_index,
        )
        for name in listed:
            try:
                info = archive.getinfo(name)
            except KeyError:
                self.stats.index_entries_missing += 1
                logger.warning("Classpath index lists %s but it is not in the archive", name)
                continue
            yield info

    def _visit(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, provenance: Provenance) -> None:
        if info.is_dir():
            return

        name = info.filename
        if provenance.is_root:
            name = self.layout.strip_classes_root(name)

        if self.layout.is_class(name):
            if not self.class_filter.accepts(self.layout.class_name(name)):
                self.stats.classes_rejected += 1
                return
            self.stats.classes_accepted += 1
            entry = ArchiveEntry(
                entry_name=info.filename,
                name=name,
                payload=self._read(archive, info, provenance),
                nested=False,
            )
            self._visit_class(entry, provenance)
        elif self.layout.is_archive(name):
            entry = ArchiveEntry(
                entry_name=info.filename,
                name=name,
                payload=self._read(archive, info, provenance),
                nested=True,
            )
            logger.debug("Entering nested archive %s", entry.entry_name)
            self.traverse(entry.payload, Provenance.nested(entry.entry_name))

    def _visit_class(self, entry: ArchiveEntry, provenance: Provenance) -> None:
        try:
            enum_info = self.extractor.extract_if_enum(entry.payload)
        except ClassFormatError as e:
            raise ClassFormatError(f"{entry.entry_name} in {provenance}: {e}") from e

        if enum_info is not None:
            self.aggregator.record(enum_info, provenance)


def traverse(
    archive_bytes: bytes,
    provenance: Provenance,
    class_filter: ClassFilter,
    aggregator: EnumAggregator,
) -> None:
    """Walk one archive with the default layout and extractor."""
    ArchiveTraverser(class_filter, aggregator).traverse(archive_bytes, provenance)


def scan_archive(
    archive_path: Path,
    class_filter: ClassFilter | None = None,
    layout: ArchiveLayout = DEFAULT_LAYOUT,
    extractor: EnumExtractor | None = None,
) -> EnumReport:
    """Scan a jar on disk and return the finished report."""
    start_time = time.time()

    try:
        archive_bytes = archive_path.read_bytes()
    except OSError as e:
        raise ArchiveError(f"Cannot read archive {archive_path}: {e}") from e

    aggregator = EnumAggregator()
    traverser = ArchiveTraverser(
        class_filter or AcceptAllFilter(),
        aggregator,
        extractor=extractor,
        layout=layout,
    )
    traverser.traverse(archive_bytes, Provenance.root())

    metadata = ScanMetadata(
        archive=str(archive_path),
        scanned_at=datetime.now(),
        jarenum_version=__version__,
        duration_ms=int((time.time() - start_time) * 1000),
        stats=aggregator.stats,
    )
    return aggregator.report(metadata)
