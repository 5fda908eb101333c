"""Shared fixtures for storage tests."""

import pytest

from bindlib.core.models import PointBinding, SceneBinding
from bindlib.storage.backends.filesystem import FileLibrary
from bindlib.storage.backends.secure import SecureStoreLibrary
from bindlib.storage.events import ShutdownNotifier
from bindlib.storage.registry import LibraryRegistry
from bindlib.storage.stores import MemorySecureStore


@pytest.fixture
def notifier():
    """Fresh shutdown notifier, never fired at interpreter exit."""
    return ShutdownNotifier()


@pytest.fixture
def secure_store():
    """Fresh in-memory secure store."""
    return MemorySecureStore()


@pytest.fixture
def point_binding():
    """A point binding on a single anchor."""
    return PointBinding(
        anchor_id="anchor-a",
        position=(0.5, 1.25, -2.0),
        rotation=(0.0, 0.7071, 0.0, 0.7071),
    )


@pytest.fixture
def other_point_binding():
    """A second, different point binding."""
    return PointBinding(anchor_id="anchor-b", position=(3.0, 0.0, 1.0))


@pytest.fixture
def scene_binding():
    """A scene binding spanning three anchors."""
    return SceneBinding(
        points=(
            PointBinding(anchor_id="anchor-a", position=(1.0, 0.0, 0.0)),
            PointBinding(anchor_id="anchor-b", position=(0.0, 1.0, 0.0)),
            PointBinding(anchor_id="anchor-c", position=(0.0, 0.0, 1.0)),
        )
    )


@pytest.fixture
def file_factory(temp_dir, notifier):
    """Factory creating file libraries inside temp_dir."""
    return FileLibrary.factory(temp_dir, notifier=notifier)


@pytest.fixture
def secure_factory(secure_store, notifier):
    """Factory creating secure store libraries on the memory store."""
    return SecureStoreLibrary.factory(secure_store, notifier=notifier)


@pytest.fixture
def file_registry(file_factory, notifier):
    """Registry creating file libraries."""
    return LibraryRegistry(factory=file_factory, notifier=notifier)


@pytest.fixture
def secure_registry(secure_store, notifier):
    """Registry using its default secure store factory."""
    return LibraryRegistry(notifier=notifier, secure_store=secure_store)
