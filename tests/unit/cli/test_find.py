"""Unit tests for the find command."""

import json
from pathlib import Path

from tidyfs.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _json_paths(output: str) -> set[str]:
    return {Path(item["path"]).name for item in json.loads(output)}


class TestFindCommand:
    """Tests for tidyfs find."""

    def test_table_output(self, sample_tree: Path) -> None:
        """Table output ends with the number of matches."""
        result = runner.invoke(app, ["find", str(sample_tree)])

        assert result.exit_code == 0
        assert "Found 3 file(s)" in result.output

    def test_json_output(self, sample_tree: Path) -> None:
        """JSON output lists every match with size and mtime."""
        result = runner.invoke(app, ["find", str(sample_tree), "--format", "json"])

        assert result.exit_code == 0
        items = json.loads(result.stdout)
        assert {Path(i["path"]).name for i in items} == {"f1.txt", "f2.txt", "f3.txt"}
        assert all(i["size_bytes"] == 1 for i in items)
        assert all(i["mtime"] for i in items)

    def test_pattern_and_no_recursive(self, sample_tree: Path) -> None:
        """--pattern and --no-recursive narrow the search."""
        result = runner.invoke(
            app,
            ["find", str(sample_tree), "-p", "*.txt", "--no-recursive", "-f", "json"],
        )

        assert result.exit_code == 0
        assert _json_paths(result.stdout) == {"f1.txt"}

    def test_max_depth(self, deep_tree: Path) -> None:
        """--max-depth limits how far the walk descends."""
        result = runner.invoke(app, ["find", str(deep_tree), "-d", "1", "-f", "json"])

        assert result.exit_code == 0
        assert _json_paths(result.stdout) == {"l0.txt", "l1.txt"}

    def test_hidden_flag(self, tmp_path: Path) -> None:
        """Hidden files appear only with --hidden."""
        (tmp_path / ".hidden").write_text("x")
        (tmp_path / "shown").write_text("x")

        default = runner.invoke(app, ["find", str(tmp_path), "-f", "json"])
        with_hidden = runner.invoke(app, ["find", str(tmp_path), "--hidden", "-f", "json"])

        assert _json_paths(default.stdout) == {"shown"}
        assert _json_paths(with_hidden.stdout) == {".hidden", "shown"}

    def test_limit(self, sample_tree: Path) -> None:
        """--limit truncates the listing but reports the full count."""
        result = runner.invoke(app, ["find", str(sample_tree), "--limit", "1"])

        assert result.exit_code == 0
        assert "Found 3 file(s)" in result.output
        assert "showing 1 of 3" in result.output

    def test_no_matches(self, sample_tree: Path) -> None:
        """An empty result prints a friendly message."""
        result = runner.invoke(app, ["find", str(sample_tree), "-p", "*.iso"])

        assert result.exit_code == 0
        assert "No matching files found." in result.output

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory is an error, not an empty result."""
        result = runner.invoke(app, ["find", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.output

    def test_config_defaults_used(self, sample_tree: Path, isolated_config: Path) -> None:
        """The [scan] section supplies defaults for omitted options."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text('[scan]\npattern = "f3*"\n')

        result = runner.invoke(app, ["find", str(sample_tree), "-f", "json"])

        assert result.exit_code == 0
        assert _json_paths(result.stdout) == {"f3.txt"}

    def test_invalid_config(self, sample_tree: Path, isolated_config: Path) -> None:
        """A broken config file stops the command with an error."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[scan\n")

        result = runner.invoke(app, ["find", str(sample_tree)])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output
