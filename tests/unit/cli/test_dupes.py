"""Unit tests for the dupes command."""

import hashlib
import json
from pathlib import Path

from tidyfs.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestDupesCommand:
    """Tests for tidyfs dupes."""

    def test_reports_groups(self, sample_tree: Path) -> None:
        """Table output summarizes groups and reclaimable space."""
        result = runner.invoke(app, ["dupes", str(sample_tree)])

        assert result.exit_code == 0
        assert "Group 1" in result.output
        assert "Found 1 duplicate group(s) covering 2 files" in result.output

    def test_json_output(self, sample_tree: Path) -> None:
        """JSON output maps each digest to its paths."""
        result = runner.invoke(app, ["dupes", str(sample_tree), "--format", "json"])

        assert result.exit_code == 0
        groups = json.loads(result.stdout)
        digest = hashlib.sha256(b"X").hexdigest()
        assert list(groups) == [digest]
        assert [Path(p).name for p in groups[digest]] == ["f1.txt", "f2.txt"]

    def test_no_duplicates(self, tmp_path: Path) -> None:
        """A tree of unique files reports nothing to do."""
        (tmp_path / "a").write_text("one")
        (tmp_path / "b").write_text("two")

        result = runner.invoke(app, ["dupes", str(tmp_path)])

        assert result.exit_code == 0
        assert "No duplicate files found." in result.output

    def test_no_recursive(self, sample_tree: Path) -> None:
        """--no-recursive ignores copies in subdirectories."""
        result = runner.invoke(app, ["dupes", str(sample_tree), "--no-recursive", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {}

    def test_workers_and_algorithm_from_config(
        self, sample_tree: Path, isolated_config: Path
    ) -> None:
        """[hashing] settings choose the digest algorithm."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text('[hashing]\nalgorithm = "md5"\nworkers = 2\n')

        result = runner.invoke(app, ["dupes", str(sample_tree), "-f", "json"])

        assert result.exit_code == 0
        assert list(json.loads(result.stdout)) == [hashlib.md5(b"X").hexdigest()]

    def test_invalid_workers(self, sample_tree: Path) -> None:
        """--workers must be at least 1."""
        result = runner.invoke(app, ["dupes", str(sample_tree), "--workers", "0"])

        assert result.exit_code != 0

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory exits with an error."""
        result = runner.invoke(app, ["dupes", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.output
