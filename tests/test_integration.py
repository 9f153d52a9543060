"""End-to-end tests for scanning jars on disk."""

from pathlib import Path

import pytest

from jarenum.archive import scan_archive
from jarenum.errors import ArchiveError
from jarenum.filters import PatternFilter
from jvm_builders import AVRO_GENERATED, build_jar, classpath_index, enum_class, plain_class


class TestScanArchive:
    """Tests for scan_archive."""

    def test_root_and_nested_enums(self, tmp_path: Path):
        """A root enum and a marked nested enum are both reported."""
        lib = build_jar(
            [("com/bar/Shape.class", enum_class("com/bar/Shape", ["CIRCLE", "SQUARE"], visible=[AVRO_GENERATED]))]
        )
        jar_path = tmp_path / "app.jar"
        jar_path.write_bytes(
            build_jar(
                [
                    ("com/foo/Color.class", enum_class("com/foo/Color", ["RED", "GREEN", "BLUE"])),
                    ("lib.jar", lib),
                ]
            )
        )

        report = scan_archive(jar_path)

        assert report.to_dict()["enums"] == [
            {
                "class_name": "com/foo/Color",
                "members": ["RED", "GREEN", "BLUE"],
                "avro_generated": False,
                "source": "root",
            },
            {
                "class_name": "com/bar/Shape",
                "members": ["CIRCLE", "SQUARE"],
                "avro_generated": True,
                "source": "lib.jar",
            },
        ]
        assert report.metadata.archive == str(jar_path)
        assert report.metadata.stats.archives_visited == 2
        assert report.metadata.stats.enums_found == 2

    def test_spring_boot_layout(self, tmp_path: Path):
        """A Spring Boot jar is scanned in classpath index order."""
        lib_b = build_jar([("b/Beta.class", enum_class("b/Beta", ["B1"]))])
        lib_a = build_jar([("a/Alpha.class", enum_class("a/Alpha", ["A1"]))])
        jar_path = tmp_path / "boot.jar"
        jar_path.write_bytes(
            build_jar(
                [
                    ("BOOT-INF/", b""),
                    ("BOOT-INF/lib/a.jar", lib_a),
                    ("BOOT-INF/lib/b.jar", lib_b),
                    ("BOOT-INF/classes/com/app/Mode.class", enum_class("com/app/Mode", ["ON", "OFF"])),
                    ("BOOT-INF/classes/com/app/App.class", plain_class("com/app/App")),
                    ("BOOT-INF/classpath.idx", classpath_index(["BOOT-INF/lib/b.jar", "BOOT-INF/lib/a.jar"])),
                ]
            )
        )

        report = scan_archive(jar_path, PatternFilter.compile("^(com/app|a|b)/"))

        assert [(r.class_name, str(r.source)) for r in report] == [
            ("com/app/Mode", "root"),
            ("b/Beta", "BOOT-INF/lib/b.jar"),
            ("a/Alpha", "BOOT-INF/lib/a.jar"),
        ]

    def test_missing_file(self, tmp_path: Path):
        """A jar that does not exist is an ArchiveError."""
        with pytest.raises(ArchiveError, match="Cannot read archive"):
            scan_archive(tmp_path / "absent.jar")
