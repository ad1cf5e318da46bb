"""Unit tests for the config show and config init commands."""

from pathlib import Path

from tidyfs.cli.main import app
from tidyfs.core.config import TidyConfig, load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for tidyfs config show."""

    def test_defaults_when_no_file(self) -> None:
        """Without a config file the built-in defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "built-in defaults" in result.output
        assert "threshold_days = 30" in result.output

    def test_shows_file_values(self, isolated_config: Path) -> None:
        """Values from the config file are displayed."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[cleanup]\nthreshold_days = 12\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "threshold_days = 12" in result.output

    def test_invalid_file(self, isolated_config: Path) -> None:
        """An invalid config is reported with a non-zero exit."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[hashing]\nworkers = 0\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output


class TestConfigInit:
    """Tests for tidyfs config init."""

    def test_writes_defaults(self, isolated_config: Path) -> None:
        """init writes a loadable default config."""
        result = runner.invoke(app, ["config", "init"])

        path = isolated_config / "tidyfs" / "config.toml"
        assert result.exit_code == 0
        assert "Wrote default configuration" in result.output
        assert load_config(path) == TidyConfig()

    def test_refuses_to_overwrite(self, isolated_config: Path) -> None:
        """An existing file is kept unless --force is given."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        path = config_dir / "config.toml"
        path.write_text("[cleanup]\nthreshold_days = 3\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert "threshold_days = 3" in path.read_text()

    def test_force_overwrites(self, isolated_config: Path) -> None:
        """--force replaces an existing file with the defaults."""
        config_dir = isolated_config / "tidyfs"
        config_dir.mkdir()
        path = config_dir / "config.toml"
        path.write_text("[cleanup]\nthreshold_days = 3\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert load_config(path).cleanup.threshold_days == 30
