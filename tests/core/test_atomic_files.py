"""
Tests for atomic writes and guarded deletion.
"""

import pytest

from tacobuild.core.filesystem import FilesystemError, atomic_write, safe_rmtree


class TestAtomicWrite:
    def test_creates_file_and_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "marker.json"

        atomic_write(target, '{"version": "5.1.1"}')

        assert target.read_text() == '{"version": "5.1.1"}'

    def test_replaces_existing(self, tmp_path):
        target = tmp_path / "marker.json"
        target.write_text("old")

        atomic_write(target, "new")

        assert target.read_text() == "new"

    def test_bytes_content(self, tmp_path):
        target = tmp_path / "data.bin"

        atomic_write(target, b"\x00\x01")

        assert target.read_bytes() == b"\x00\x01"

    def test_no_temp_files_left(self, tmp_path):
        atomic_write(tmp_path / "marker.json", "x")

        assert [p.name for p in tmp_path.iterdir()] == ["marker.json"]


class TestSafeRmtree:
    def test_removes_directory_under_prefix(self, tmp_path):
        target = tmp_path / "5.1.1" / "node_modules"
        target.mkdir(parents=True)

        safe_rmtree(tmp_path / "5.1.1", require_prefix=tmp_path)

        assert not (tmp_path / "5.1.1").exists()

    def test_refuses_outside_prefix(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        cache = tmp_path / "cache"
        cache.mkdir()

        with pytest.raises(ValueError, match="Refusing to delete"):
            safe_rmtree(outside, require_prefix=cache)
        assert outside.exists()

    def test_refuses_prefix_itself(self, tmp_path):
        with pytest.raises(ValueError):
            safe_rmtree(tmp_path, require_prefix=tmp_path)

    def test_missing_path_is_noop(self, tmp_path):
        safe_rmtree(tmp_path / "missing", require_prefix=tmp_path)

    def test_file_rejected(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(FilesystemError, match="not a directory"):
            safe_rmtree(target)
