"""Pytest configuration and fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from bindlib.cli.main import cli
from bindlib.core.models import PointBinding, SceneBinding
from bindlib.storage.backends.filesystem import FileLibrary
from bindlib.storage.events import ShutdownNotifier


@pytest.fixture
def data_dir(tmp_path):
    """Data directory used by CLI invocations."""
    return tmp_path / "data"


@pytest.fixture
def cli_runner(data_dir):
    """Runner invoking the CLI on the file backend in data_dir."""
    runner = CliRunner()

    class Runner:
        def invoke(self, args, **kwargs):
            return runner.invoke(
                cli,
                ["--no-color", "--data-dir", str(data_dir), "--backend", "file", *args],
                **kwargs,
            )

    return Runner()


@pytest.fixture
def stored_library(data_dir):
    """A saved file library with point and scene bindings."""
    library = FileLibrary(
        "L1",
        persist_on_shutdown=False,
        notifier=ShutdownNotifier(),
        directory=data_dir / "BindingLibrary",
    )
    library.set_point_binding(
        "door", PointBinding(anchor_id="anchor-door", position=(1.0, 0.0, 2.0))
    )
    library.set_scene_binding(
        "table",
        SceneBinding(
            points=(
                PointBinding(anchor_id="anchor-1"),
                PointBinding(anchor_id="anchor-2"),
            )
        ),
    )
    library.save()
    return library
