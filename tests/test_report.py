"""
Tests for report assembly and the console/file collaborators.
"""

import io
import os
from unittest.mock import patch

import pytest

from dazzledu import DirectoryRecord, ScanConfiguration, ReportFile, UNBOUNDED_DEPTH
from dazzledu.report import (
    assemble,
    format_size,
    echo_lines,
    sort_records,
    header_lines,
    REPORT_TITLE,
)

GB = 1024 ** 3


@pytest.fixture
def config():
    return ScanConfiguration(root="/data", min_size_bytes=GB, max_depth=UNBOUNDED_DEPTH)


class TestFormatSize:

    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (600 * 1024 ** 2, "600 MB"),
        (1100 * 1024 ** 2, "1.07 GB"),
        (5 * 1024 ** 4, "5 TB"),
        (3 * 1024 ** 5, "3072 TB"),
    ])
    def test_units(self, size, expected):
        assert format_size(size) == expected


class TestAssemble:

    def test_header_echoes_configuration(self, config):
        lines = assemble([], config)

        assert lines == header_lines(config)
        assert lines[0] == REPORT_TITLE
        assert lines[1] == "Scan path: /data"
        assert lines[2] == "Size Threshold: 1 GB"
        assert lines[3] == "Max Depth: Infinite"
        assert lines[5].startswith("size ")
        assert lines[5].endswith("Path")

    def test_bounded_depth_in_header(self):
        config = ScanConfiguration(root="/data", min_size_bytes=GB // 10, max_depth=3)
        lines = assemble([], config)
        assert lines[2] == "Size Threshold: 0.1 GB"
        assert lines[3] == "Max Depth: 3"

    def test_records_sorted_by_descending_size(self, config):
        records = [
            DirectoryRecord("/data/small", 10, 1),
            DirectoryRecord("/data", 500, 0),
            DirectoryRecord("/data/mid", 200, 1),
        ]

        body = assemble(records, config)[len(header_lines(config)):]

        assert body == [
            "500 | /data",
            "200 | /data/mid",
            "10 | /data/small",
        ]

    def test_ties_keep_input_order(self, config):
        records = [
            DirectoryRecord("/data/b", 100, 1),
            DirectoryRecord("/data/a", 100, 1),
            DirectoryRecord("/data", 300, 0),
        ]

        body = assemble(records, config)[len(header_lines(config)):]

        assert body == ["300 | /data", "100 | /data/b", "100 | /data/a"]

    def test_human_readable(self, config):
        records = [DirectoryRecord("/data", 1100 * 1024 ** 2, 0)]

        body = assemble(records, config, human_readable=True)[len(header_lines(config)):]

        assert body == ["1.07 GB | /data"]

    def test_does_not_modify_input(self, config):
        records = [DirectoryRecord("/a", 1, 1), DirectoryRecord("/b", 2, 1)]
        assemble(records, config)
        assert [r.path for r in records] == ["/a", "/b"]

    def test_sort_records_non_increasing(self):
        records = [DirectoryRecord(f"/d{i}", size, 1) for i, size in enumerate([3, 9, 1, 9, 0, 4])]
        sizes = [r.byte_size for r in sort_records(records)]
        assert sizes == sorted(sizes, reverse=True)


class TestDirectoryRecord:

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError):
            DirectoryRecord("/x", -1, 0)
        with pytest.raises(ValueError):
            DirectoryRecord("/x", 0, -1)

    def test_is_frozen(self):
        record = DirectoryRecord("/x", 1, 0)
        with pytest.raises(Exception):
            record.byte_size = 2


class TestEcho:

    def test_echo_lines(self):
        stream = io.StringIO()
        echo_lines(["one", "two"], stream=stream)
        assert stream.getvalue() == "one\ntwo\n"


class TestReportFile:

    def test_clear_removes_previous_report(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("old run\n")

        assert ReportFile(str(path)).clear() is True
        assert not path.exists()

    def test_clear_without_existing_file(self, tmp_path):
        assert ReportFile(str(tmp_path / "none.txt")).clear() is True

    def test_clear_failure_is_a_warning(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("old")
        warnings = io.StringIO()
        report = ReportFile(str(path), warnings=warnings)

        with patch("dazzledu.report.os.remove", side_effect=PermissionError("locked")):
            assert report.clear() is False

        assert "Could not clear previous results file" in warnings.getvalue()
        assert path.exists()

    def test_write_appends_lines(self, tmp_path):
        path = tmp_path / "report.txt"
        report = ReportFile(str(path))

        report.write(["a", "b"])
        report.write(["c"])

        assert path.read_text(encoding="utf-8") == "a\nb\nc\n"

    def test_write_after_clear_contains_only_new_run(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("stale\n")
        report = ReportFile(str(path))

        report.clear()
        report.write(["fresh"])

        assert path.read_text(encoding="utf-8") == "fresh\n"

    def test_write_into_missing_directory_raises(self, tmp_path):
        report = ReportFile(os.path.join(str(tmp_path), "missing", "r.txt"))
        with pytest.raises(OSError):
            report.write(["x"])
