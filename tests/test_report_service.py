"""
Tests for ReportService — the copy/delete list files written by -l.
"""
from treesync.core.models import DiffResult, Entry
from treesync.services.report_service import ReportService


def _entry(path, is_directory=False):
    return Entry(relative_path=path, absolute_path=f"/src/{path}", is_directory=is_directory)


class TestReportService:

    def test_one_path_per_line_with_crlf(self, tmp_path):
        target = tmp_path / "copy.txt"

        ReportService.save(str(target), [_entry("a", True), _entry("a/x.txt")])

        assert target.read_bytes() == b"a\r\na/x.txt\r\n"

    def test_non_ascii_paths_are_utf8(self, tmp_path):
        target = tmp_path / "copy.txt"

        ReportService.save(str(target), [_entry("фото/снимок.jpg")])

        assert target.read_bytes() == "фото/снимок.jpg\r\n".encode("utf-8")

    def test_empty_list_gives_empty_file(self, tmp_path):
        target = tmp_path / "del.txt"

        ReportService.save(str(target), [])

        assert target.exists()
        assert target.read_bytes() == b""

    def test_existing_report_is_replaced(self, tmp_path):
        target = tmp_path / "del.txt"
        target.write_bytes(b"stale\r\nlines\r\n")

        ReportService.save(str(target), [_entry("fresh")])

        assert target.read_bytes() == b"fresh\r\n"

    def test_save_results_keeps_list_order(self, tmp_path):
        diff = DiffResult(
            copy=[_entry("new", True), _entry("a.txt"), _entry("new/b.txt")],
            delete=[_entry("old/z.txt"), _entry("old", True)],
        )
        copy_path, delete_path = tmp_path / "copy.txt", tmp_path / "del.txt"

        ReportService.save_results(str(copy_path), str(delete_path), diff)

        assert copy_path.read_bytes() == b"new\r\na.txt\r\nnew/b.txt\r\n"
        assert delete_path.read_bytes() == b"old/z.txt\r\nold\r\n"
