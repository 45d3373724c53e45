"""
Unit tests for TreeScannerImpl.
Verifies pre-order output, relative path format, determinism and error handling.
"""
import os
import stat
import sys
from unittest import mock

import pytest

from conftest import build_tree
from treesync.core.errors import ConfigurationError, ScanError
from treesync.core.scanner import TreeScannerImpl


class TestTreeScannerImpl:
    """Test tree walking and the all-or-nothing error policy."""

    def test_finds_files_and_directories_recursively(self, src_dir):
        build_tree(src_dir, {
            "a/x.txt": b"hi",
            "a/b/y.txt": b"yo",
            "top.txt": b"t",
            "empty": None,
        })

        entries = TreeScannerImpl(str(src_dir)).scan()
        by_path = {e.relative_path: e for e in entries}

        assert set(by_path) == {"a", "a/x.txt", "a/b", "a/b/y.txt", "top.txt", "empty"}
        assert by_path["a"].is_directory
        assert by_path["a/b"].is_directory
        assert by_path["empty"].is_directory
        assert not by_path["a/b/y.txt"].is_directory
        assert by_path["a/b/y.txt"].size == 2

    def test_directory_precedes_its_children(self, src_dir):
        """Pre-order: every parent directory is emitted before any descendant."""
        build_tree(src_dir, {
            "z/deep/er/file": b"1",
            "a/file": b"2",
            "m/n/o": None,
        })

        entries = TreeScannerImpl(str(src_dir)).scan()
        position = {e.relative_path: i for i, e in enumerate(entries)}

        for entry in entries:
            parts = entry.relative_path.split("/")
            for depth in range(1, len(parts)):
                parent = "/".join(parts[:depth])
                assert position[parent] < position[entry.relative_path]

    def test_depth_first_order_is_deterministic(self, src_dir):
        """Siblings come in name order and a subtree is finished before its next sibling."""
        build_tree(src_dir, {
            "b/2.txt": b"",
            "b/1.txt": b"",
            "a.txt": b"",
            "c.txt": b"",
        })

        paths = [e.relative_path for e in TreeScannerImpl(str(src_dir)).scan()]

        assert paths == ["a.txt", "b", "b/1.txt", "b/2.txt", "c.txt"]
        assert paths == [e.relative_path for e in TreeScannerImpl(str(src_dir)).scan()]

    def test_paths_are_forward_slash_relative(self, src_dir):
        build_tree(src_dir, {"one/two/three.txt": b"x"})

        entries = TreeScannerImpl(str(src_dir)).scan()

        for entry in entries:
            assert not entry.relative_path.startswith("/")
            assert not entry.relative_path.endswith("/")
            assert "\\" not in entry.relative_path
            assert os.path.exists(entry.absolute_path)

    def test_records_mode_bits(self, src_dir):
        path = src_dir / "script.sh"
        path.write_bytes(b"#!/bin/sh\n")
        path.chmod(0o750)

        entry = TreeScannerImpl(str(src_dir)).scan()[0]

        assert entry.permissions == 0o750
        assert stat.S_ISREG(entry.mode)

    def test_empty_root_returns_empty_list(self, src_dir):
        assert TreeScannerImpl(str(src_dir)).scan() == []

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlink_to_directory_is_not_followed(self, src_dir, temp_dir):
        target = temp_dir / "outside"
        build_tree(target, {"secret.txt": b"s"})
        os.symlink(target, src_dir / "link")

        entries = TreeScannerImpl(str(src_dir)).scan()

        assert [e.relative_path for e in entries] == ["link"]
        assert not entries[0].is_directory

    def test_missing_root_is_configuration_error(self, temp_dir):
        with pytest.raises(ConfigurationError, match="does not exist"):
            TreeScannerImpl(str(temp_dir / "nope")).scan()

    def test_file_root_is_configuration_error(self, temp_dir):
        path = temp_dir / "file.txt"
        path.write_bytes(b"x")
        with pytest.raises(ConfigurationError, match="Not a directory"):
            TreeScannerImpl(str(path)).scan()

    def test_unreadable_subdirectory_aborts_scan(self, src_dir):
        """No partial result: the first listing error propagates as ScanError."""
        build_tree(src_dir, {"ok/file.txt": b"1", "broken/file.txt": b"2"})
        real_scandir = os.scandir

        def failing_scandir(path):
            if os.path.basename(path) == "broken":
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with mock.patch("treesync.core.scanner.os.scandir", side_effect=failing_scandir):
            with pytest.raises(ScanError, match="broken") as exc_info:
                TreeScannerImpl(str(src_dir)).scan()

        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_stopped_flag_cancels_scan(self, src_dir):
        build_tree(src_dir, {"a/b/c.txt": b"1"})
        with pytest.raises(ScanError, match="cancelled"):
            TreeScannerImpl(str(src_dir)).scan(stopped_flag=lambda: True)

    def test_progress_callback_reports_final_count(self, src_dir):
        build_tree(src_dir, {"a.txt": b"1", "b.txt": b"2", "d/c.txt": b"3"})
        calls = []

        TreeScannerImpl(str(src_dir)).scan(progress_callback=lambda *args: calls.append(args))

        assert calls[-1] == ("scanning", 4, None)

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlink_to_file_reports_target_size_and_mode(self, src_dir, temp_dir):
        """Links are copied through, so the entry must describe the target's content."""
        target = temp_dir / "outside.bin"
        target.write_bytes(b"z" * 1000)
        target.chmod(0o640)
        os.symlink(target, src_dir / "link.bin")

        entry = TreeScannerImpl(str(src_dir)).scan()[0]

        assert not entry.is_directory
        assert entry.size == 1000
        assert entry.permissions == 0o640

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_dangling_symlink_does_not_abort_scan(self, src_dir, temp_dir):
        os.symlink(temp_dir / "gone", src_dir / "dangling")

        entries = TreeScannerImpl(str(src_dir)).scan()

        assert [e.relative_path for e in entries] == ["dangling"]
