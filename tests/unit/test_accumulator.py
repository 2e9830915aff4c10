"""
Unit tests for the in-memory record sink (cgroup_metrics.accumulator).
"""

from __future__ import annotations

import pandas as pd

from cgroup_metrics.accumulator import MemoryAccumulator, Record


def _filled() -> MemoryAccumulator:
    acc = MemoryAccumulator()
    acc.add_fields("cgroup:memory.stat", {"cache": 1, "rss": 2}, {"path": "/m/memory.stat"})
    acc.add_fields("cgroup:memory", {"memory.limit_in_bytes": 5}, {"path": "/m"})
    acc.add_fields("cgroup:memory", {"memory.use_hierarchy": "12-781"}, {"path": "/m/g"})
    return acc


class TestMemoryAccumulator:
    """Tests for MemoryAccumulator."""

    def test_keeps_emission_order(self):
        acc = _filled()
        assert len(acc) == 3
        assert [r.measurement for r in acc.records] == [
            "cgroup:memory.stat",
            "cgroup:memory",
            "cgroup:memory",
        ]

    def test_copies_mappings(self):
        acc = MemoryAccumulator()
        fields = {"a": 1}
        tags = {"path": "/x"}
        acc.add_fields("m", fields, tags)
        fields["a"] = 2
        tags["path"] = "/y"
        assert acc.records[0] == Record("m", {"a": 1}, {"path": "/x"})

    def test_find_by_measurement_and_tags(self):
        acc = _filled()
        assert len(acc.find("cgroup:memory")) == 2
        found = acc.find("cgroup:memory", {"path": "/m/g"})
        assert [r.fields for r in found] == [{"memory.use_hierarchy": "12-781"}]
        assert acc.find("cgroup:cpu") == []

    def test_measurements(self):
        assert _filled().measurements() == ["cgroup:memory.stat", "cgroup:memory"]


class TestToFrame:
    """Tests for MemoryAccumulator.to_frame()."""

    def test_columns(self):
        df = _filled().to_frame()
        assert list(df.columns) == [
            "measurement",
            "path",
            "cache",
            "rss",
            "memory.limit_in_bytes",
            "memory.use_hierarchy",
        ]
        assert len(df) == 3

    def test_filter_by_measurement(self):
        df = _filled().to_frame("cgroup:memory")
        assert list(df["path"]) == ["/m", "/m/g"]
        assert df["memory.limit_in_bytes"].iloc[0] == 5
        assert pd.isna(df["memory.limit_in_bytes"].iloc[1])
        assert df["memory.use_hierarchy"].iloc[1] == "12-781"

    def test_empty(self):
        df = MemoryAccumulator().to_frame()
        assert list(df.columns) == ["measurement"]
        assert df.empty

    def test_large_int_kept_exact_when_field_missing(self):
        big = 9223372036854771712
        acc = MemoryAccumulator()
        acc.add_fields("cgroup:memory", {"memory.limit_in_bytes": big}, {"path": "/a"})
        acc.add_fields("cgroup:memory", {}, {"path": "/b"})
        df = acc.to_frame()
        assert str(df["memory.limit_in_bytes"].dtype) == "Int64"
        assert int(df["memory.limit_in_bytes"].iloc[0]) == big
        assert pd.isna(df["memory.limit_in_bytes"].iloc[1])

    def test_text_column_stays_object(self):
        df = _filled().to_frame("cgroup:memory")
        assert df["memory.use_hierarchy"].dtype == object


class TestToFrameColumnNames:
    """Tags and fields never share a column."""

    def test_field_named_like_tag(self):
        acc = MemoryAccumulator()
        acc.add_fields("cgroup:x.stat", {"path": 5, "rss": 1}, {"path": "/cg/x.stat"})
        df = acc.to_frame()
        assert list(df.columns) == ["measurement", "path", "field_path", "rss"]
        assert df["path"].iloc[0] == "/cg/x.stat"
        assert df["field_path"].iloc[0] == 5

    def test_field_named_measurement(self):
        acc = MemoryAccumulator()
        acc.add_fields("cgroup:x.stat", {"measurement": 3}, {"path": "/p"})
        df = acc.to_frame()
        assert list(df.columns) == ["measurement", "path", "field_measurement"]
        assert df["measurement"].iloc[0] == "cgroup:x.stat"
        assert df["field_measurement"].iloc[0] == 3

    def test_renamed_field_does_not_take_existing_field_name(self):
        acc = MemoryAccumulator()
        acc.add_fields("m", {"path": 1, "field_path": 2}, {"path": "/p"})
        df = acc.to_frame()
        assert list(df.columns) == ["measurement", "path", "field_field_path", "field_path"]
        assert df["field_path"].iloc[0] == 2
        assert df["field_field_path"].iloc[0] == 1

    def test_tag_named_measurement(self):
        acc = MemoryAccumulator()
        acc.add_fields("m", {"v": 1}, {"measurement": "x"})
        df = acc.to_frame()
        assert list(df.columns) == ["measurement", "tag_measurement", "v"]
        assert df["measurement"].iloc[0] == "m"
