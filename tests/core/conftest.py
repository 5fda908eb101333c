"""Shared fixtures for core tests."""

import pytest

from bindlib.core.models import PointBinding, SceneBinding


@pytest.fixture
def scene_binding():
    """A scene binding spanning three anchors."""
    return SceneBinding(
        points=(
            PointBinding(anchor_id="anchor-a"),
            PointBinding(anchor_id="anchor-b", position=(0.0, 1.0, 0.0)),
            PointBinding(anchor_id="anchor-c", position=(0.0, 0.0, 1.0)),
        )
    )
