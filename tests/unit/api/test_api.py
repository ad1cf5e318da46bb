"""Unit tests for the public operations in tidyfs.api."""

from collections.abc import Callable
from contextlib import nullcontext
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from tidyfs import api

SetAge = Callable[[Path, float], None]


class TestFindFiles:
    """Tests for find_files."""

    def test_success(self, sample_tree: Path) -> None:
        """Matching files are returned with no error."""
        result = api.find_files(sample_tree, "*.txt")

        assert result.ok
        assert {p.name for p in result.value} == {"f1.txt", "f2.txt", "f3.txt"}

    def test_missing_root_is_distinguishable(self, tmp_path: Path) -> None:
        """A missing directory is an error, not an empty success."""
        result = api.find_files(tmp_path / "missing")

        assert not result.ok
        assert result.value == []
        assert "Not a directory" in (result.error or "")

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory is a successful empty result."""
        result = api.find_files(tmp_path)

        assert result.ok
        assert result.value == []


class TestFindDuplicateFiles:
    """Tests for find_duplicate_files."""

    def test_groups(self, sample_tree: Path) -> None:
        """Only the duplicated content forms a group."""
        result = api.find_duplicate_files(sample_tree)

        assert result.ok
        assert [sorted(p.name for p in group) for group in result.value.values()] == [
            ["f1.txt", "f2.txt"]
        ]

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing directory returns an empty mapping with an error."""
        result = api.find_duplicate_files(tmp_path / "missing")

        assert not result.ok
        assert result.value == {}


class TestAgeOperations:
    """Tests for get_old_files and cleanup_old_files."""

    @pytest.fixture
    def logs(self, tmp_path: Path, set_age: SetAge) -> Path:
        for index in range(5):
            path = tmp_path / f"{index}.log"
            path.write_text("x")
            if index < 3:
                set_age(path, 10)
        return tmp_path

    def test_get_old_files(self, logs: Path) -> None:
        """Files older than the threshold are listed."""
        result = api.get_old_files(logs, 7, "log")

        assert result.ok
        assert sorted(p.name for p in result.value) == ["0.log", "1.log", "2.log"]

    def test_cleanup_old_files(self, logs: Path) -> None:
        """Deletes old files and returns how many were removed."""
        result = api.cleanup_old_files(logs, 7, "*.log")

        assert result.ok
        assert result.value == 3
        assert sorted(p.name for p in logs.iterdir()) == ["3.log", "4.log"]

    def test_cleanup_dry_run(self, logs: Path) -> None:
        """A dry run deletes nothing and counts nothing as deleted."""
        result = api.cleanup_old_files(logs, 7, "log", dry_run=True)

        assert result.ok
        assert result.value == 0
        assert len(list(logs.iterdir())) == 5

    def test_get_old_files_match_all_extension(self, logs: Path) -> None:
        """The ".*" extension selects every old file, not only dot-files."""
        result = api.get_old_files(logs, 7, ".*")

        assert sorted(p.name for p in result.value) == ["0.log", "1.log", "2.log"]

    def test_cleanup_hidden_files(self, logs: Path, set_age: SetAge) -> None:
        """Old dot-files are deleted only when hidden files are included."""
        session = logs / ".session.log"
        session.write_text("x")
        set_age(session, 10)

        api.cleanup_old_files(logs, 7, "log")
        assert session.exists()

        result = api.cleanup_old_files(logs, 7, "log", include_hidden=True)

        assert result.value == 1
        assert not session.exists()

    def test_cleanup_missing_root(self, tmp_path: Path) -> None:
        """A missing directory is reported instead of returning zero silently."""
        result = api.cleanup_old_files(tmp_path / "missing", 7)

        assert not result.ok
        assert result.value == 0


class TestDirectoryQueries:
    """Tests for list_folders, file_count, directory_size and file_size."""

    def test_list_folders(self, tmp_path: Path) -> None:
        """Immediate subdirectories are listed; hidden ones can be excluded."""
        (tmp_path / "one").mkdir()
        (tmp_path / "two" / "nested").mkdir(parents=True)
        (tmp_path / ".hidden").mkdir()
        (tmp_path / "file.txt").write_text("x")

        all_folders = api.list_folders(tmp_path)
        visible = api.list_folders(tmp_path, include_hidden=False)

        assert {p.name for p in all_folders.value} == {"one", "two", ".hidden"}
        assert {p.name for p in visible.value} == {"one", "two"}

    def test_list_folders_skips_unreadable_entry(self, tmp_path: Path) -> None:
        """An entry whose type cannot be read is skipped, not fatal."""
        broken = MagicMock(path=str(tmp_path / "broken"))
        broken.is_dir.side_effect = PermissionError(13, "Permission denied")
        good = MagicMock(path=str(tmp_path / "good"))
        good.is_dir.return_value = True

        with patch("tidyfs.api.os.scandir", return_value=nullcontext([broken, good])):
            result = api.list_folders(tmp_path)

        assert result.ok
        assert result.value == [tmp_path / "good"]

    def test_list_folders_missing(self, tmp_path: Path) -> None:
        """A missing directory is an error."""
        assert not api.list_folders(tmp_path / "missing").ok

    def test_file_count(self, sample_tree: Path) -> None:
        """Counts respect extension and recursion."""
        (sample_tree / "extra.md").write_text("x")

        assert api.file_count(sample_tree).value == 2
        assert api.file_count(sample_tree, "txt").value == 1
        assert api.file_count(sample_tree, ".txt", recursive=True).value == 3

    @pytest.mark.parametrize("extension", [".*", "*.*", "*"])
    def test_file_count_match_all(self, sample_tree: Path, extension: str) -> None:
        """Match-all extensions count every file, not only dot-files."""
        assert api.file_count(sample_tree, extension).value == 1
        assert api.file_count(sample_tree, extension, recursive=True).value == 3

    def test_directory_size(self, sample_tree: Path) -> None:
        """Sizes of every file are summed, hidden files included."""
        (sample_tree / ".hidden").write_bytes(b"12345")

        result = api.directory_size(sample_tree)

        assert result.ok
        assert result.value == 8

    def test_file_size(self, tmp_path: Path) -> None:
        """A file's size in bytes; missing files report an error."""
        target = tmp_path / "data.bin"
        target.write_bytes(b"\x00" * 42)

        assert api.file_size(target).value == 42

        missing = api.file_size(tmp_path / "missing.bin")
        assert not missing.ok
        assert missing.value == 0
