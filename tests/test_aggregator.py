"""Tests for the enum report aggregator."""

import dataclasses
import logging

import pytest

from jarenum.aggregator import EnumAggregator
from jarenum.models import EnumInfo, Provenance


def _info(name: str, *members: str, marker: bool = False) -> EnumInfo:
    return EnumInfo(class_name=name, members=tuple(members), marker_present=marker)


class TestEnumAggregator:
    """Tests for EnumAggregator."""

    def test_records_in_discovery_order(self):
        """Records should keep the order they were added in."""
        aggregator = EnumAggregator()
        aggregator.record(_info("com/b/B", "X"), Provenance.root())
        aggregator.record(_info("com/a/A", "Y"), Provenance.nested("lib.jar"))

        report = aggregator.report()

        assert report.class_names() == ["com/b/B", "com/a/A"]
        assert report.records[1].source == Provenance.nested("lib.jar")

    def test_first_occurrence_wins(self, caplog):
        """A duplicate class name is dropped with a warning."""
        aggregator = EnumAggregator()
        aggregator.record(_info("com/a/Level", "LOW"), Provenance.nested("a.jar"))

        with caplog.at_level(logging.WARNING, logger="jarenum.aggregator"):
            aggregator.record(_info("com/a/Level", "LOW", "HIGH"), Provenance.nested("b.jar"))

        records = aggregator.report().records
        assert len(records) == 1
        assert records[0].members == ("LOW",)
        assert str(records[0].source) == "a.jar"
        assert "Duplicate enum com/a/Level" in caplog.text
        assert aggregator.stats.duplicates_dropped == 1
        assert aggregator.stats.enums_found == 1

    def test_contains(self):
        """Membership checks use class names."""
        aggregator = EnumAggregator()
        aggregator.record(_info("com/a/A"), Provenance.root())

        assert "com/a/A" in aggregator
        assert "com/a/B" not in aggregator

    def test_report_is_a_read_only_snapshot(self):
        """Later records do not leak into an earlier report."""
        aggregator = EnumAggregator()
        aggregator.record(_info("com/a/A"), Provenance.root())
        report = aggregator.report()

        aggregator.record(_info("com/b/B"), Provenance.root())

        assert isinstance(report.records, tuple)
        assert report.class_names() == ["com/a/A"]
        assert aggregator.report().class_names() == ["com/a/A", "com/b/B"]
        with pytest.raises(dataclasses.FrozenInstanceError):
            report.metadata = None
