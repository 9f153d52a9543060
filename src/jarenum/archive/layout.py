"""Well-known names inside (Spring Boot style) executable archives."""

from dataclasses import dataclass

CLASSES_ROOT = "BOOT-INF/classes/"
CLASSPATH_INDEX = "BOOT-INF/classpath.idx"
CLASS_SUFFIX = ".class"
ARCHIVE_SUFFIX = ".jar"


@dataclass(frozen=True)
class ArchiveLayout:
    """Entry naming conventions used while walking an archive."""

    classes_root: str = CLASSES_ROOT
    classpath_index: str = CLASSPATH_INDEX
    class_suffix: str = CLASS_SUFFIX
    archive_suffix: str = ARCHIVE_SUFFIX

    def strip_classes_root(self, entry_name: str) -> str:
        """Turn ``BOOT-INF/classes/com/foo/Bar.class`` into ``com/foo/Bar.class``."""
        return entry_name.removeprefix(self.classes_root)

    def is_class(self, name: str) -> bool:
        return name.endswith(self.class_suffix)

    def is_archive(self, name: str) -> bool:
        return name.endswith(self.archive_suffix)

    def class_name(self, name: str) -> str:
        """Internal class name for a classfile entry name."""
        return name[: -len(self.class_suffix)]


DEFAULT_LAYOUT = ArchiveLayout()
