"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from bindlib.cli.main import cli
from bindlib.storage.backends.filesystem import FileLibrary
from bindlib.storage.events import ShutdownNotifier


def _reload(data_dir, library_id):
    library = FileLibrary(
        library_id, False, ShutdownNotifier(), directory=data_dir / "BindingLibrary"
    )
    found = library.load()
    return found, library


class TestCLIEntryPoint:
    """Test the main CLI entry point."""

    def test_cli_no_command_shows_help(self):
        """Running without a command shows help."""
        result = CliRunner().invoke(cli, [])

        assert "Binding library tool" in result.output
        assert "Commands:" in result.output

    def test_cli_version_flag(self):
        """--version prints the version."""
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "bindlib version" in result.output

    def test_invalid_config_file(self, tmp_path):
        """A broken config file exits with an error."""
        bad_config = tmp_path / "bad.yaml"
        bad_config.write_text("invalid: yaml: content:")

        result = CliRunner().invoke(cli, ["--config", str(bad_config), "show", "L1"])

        assert result.exit_code != 0
        assert "Error" in result.output


class TestShowCommand:
    """Test the show command."""

    def test_show_library(self, cli_runner, stored_library):
        """show lists point and scene bindings."""
        result = cli_runner.invoke(["show", "L1"])

        assert result.exit_code == 0
        assert "point bindings: 1" in result.output
        assert "scene bindings: 1" in result.output
        assert "door" in result.output
        assert "anchor-door" in result.output
        assert "table" in result.output

    def test_show_missing_library(self, cli_runner, data_dir):
        """show on an unknown library reports an empty library and writes nothing."""
        result = cli_runner.invoke(["show", "nothing"])

        assert result.exit_code == 0
        assert "point bindings: 0" in result.output
        assert not (data_dir / "BindingLibrary" / "nothing.bld").exists()


class TestExportCommand:
    """Test the export command."""

    def test_export_stdout(self, cli_runner, stored_library):
        """export prints the library as JSON."""
        result = cli_runner.invoke(["export", "L1"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["library_id"] == "L1"
        assert data["point_bindings"]["door"]["anchor_id"] == "anchor-door"
        assert len(data["scene_bindings"]["table"]["points"]) == 2

    def test_export_file(self, cli_runner, stored_library, tmp_path):
        """export --output writes JSON to a file."""
        output = tmp_path / "L1.json"

        result = cli_runner.invoke(["export", "L1", "--output", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())["library_id"] == "L1"


class TestDeleteCommand:
    """Test the delete command."""

    def test_delete_with_yes(self, cli_runner, stored_library, data_dir):
        """delete --yes removes the library file."""
        result = cli_runner.invoke(["delete", "L1", "--yes"])

        assert result.exit_code == 0
        assert "Deleted library L1" in result.output
        assert _reload(data_dir, "L1")[0] is False

    def test_delete_cancelled(self, cli_runner, stored_library, data_dir):
        """Declining the confirmation keeps the library."""
        result = cli_runner.invoke(["delete", "L1"], input="n\n")

        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert _reload(data_dir, "L1")[0] is True


class TestCopyCommand:
    """Test the copy command."""

    def test_copy(self, cli_runner, stored_library, data_dir):
        """copy saves every binding into the target library."""
        result = cli_runner.invoke(["copy", "L1", "L2"])

        assert result.exit_code == 0
        found, library = _reload(data_dir, "L2")
        assert found is True
        assert library.point_keys() == ["door"]
        assert library.scene_keys() == ["table"]

    def test_copy_to_itself(self, cli_runner, stored_library):
        """Source and target must differ."""
        result = cli_runner.invoke(["copy", "L1", "L1"])

        assert result.exit_code != 0
        assert "must differ" in result.output
