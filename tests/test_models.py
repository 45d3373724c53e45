"""
Tests for the data models: SyncParams validation and report counters.
"""
import pytest

from treesync.core.models import (
    ApplyOrder, DEFAULT_BUFFER_SIZE, Entry, EntryResult, EntryStatus,
    HashAlgorithmName, SyncAction, SyncParams, SyncReport,
)


def _entry(path, is_directory=False, mode=0):
    return Entry(relative_path=path, absolute_path=f"/r/{path}", is_directory=is_directory, mode=mode)


class TestSyncParams:

    def test_defaults(self):
        params = SyncParams(source_root="./src", destination_root="./dst")

        assert params.hash_algorithm == HashAlgorithmName.MD5
        assert params.order == ApplyOrder.DELETE_FIRST
        assert params.buffer_size == DEFAULT_BUFFER_SIZE
        assert not params.dry_run
        assert not params.writes_reports

    @pytest.mark.parametrize("kwargs, message", [
        ({"source_root": ""}, "Source directory cannot be empty"),
        ({"destination_root": ""}, "Destination directory cannot be empty"),
        ({"max_workers": 0}, "Worker count"),
        ({"buffer_size": 0}, "Buffer size"),
        ({"copy_report": "copy.txt"}, "given together"),
    ])
    def test_rejects_invalid_values(self, kwargs, message):
        values = {"source_root": "s", "destination_root": "d", **kwargs}
        with pytest.raises(ValueError, match=message):
            SyncParams(**values)

    def test_from_human_readable_parses_buffer_size(self):
        params = SyncParams.from_human_readable(
            "s", "d", buffer_size_str="64KB",
            copy_report="copy.txt", delete_report="del.txt")

        assert params.buffer_size == 64 * 1024
        assert params.writes_reports

    def test_from_human_readable_rejects_bad_size(self):
        with pytest.raises(ValueError):
            SyncParams.from_human_readable("s", "d", buffer_size_str="huge")


class TestEntry:

    def test_permissions_strip_file_type_bits(self):
        assert _entry("f", mode=0o100644).permissions == 0o644
        assert _entry("d", is_directory=True, mode=0o040755).permissions == 0o755

    def test_depth(self):
        assert _entry("a").depth == 0
        assert _entry("a/b/c").depth == 2


class TestSyncReport:

    def _report(self):
        report = SyncReport(duration=1.5)
        report.add(EntryResult(_entry("a.txt"), SyncAction.COPY, bytes_copied=2048))
        report.add(EntryResult(_entry("dir", True), SyncAction.COPY))
        report.add(EntryResult(_entry("old"), SyncAction.DELETE))
        report.add(EntryResult(_entry("x"), SyncAction.COPY, EntryStatus.FAILED, "disk full"))
        report.add(EntryResult(_entry("x/y"), SyncAction.COPY, EntryStatus.SKIPPED, "parent directory not created: x"))
        return report

    def test_counters(self):
        report = self._report()

        assert report.copied == 2
        assert report.deleted == 1
        assert report.failed == 1
        assert report.skipped == 1
        assert report.bytes_copied == 2048
        assert not report.success
        assert [r.reason for r in report.failures] == ["disk full"]

    def test_summary_lists_failures_only_when_present(self):
        summary = self._report().print_summary()

        assert "Copied: 2 (2.00KB)" in summary
        assert "Deleted: 1" in summary
        assert "Failed: 1" in summary
        assert "Skipped: 1" in summary

        clean = SyncReport().print_summary()
        assert "Failed" not in clean
        assert "Skipped" not in clean

    def test_empty_report_is_successful(self):
        assert SyncReport().success
