"""Dictionary-backed binding libraries.

BindingDictionary keeps both binding collections in memory. DictionaryLibrary
embeds one and implements load/save/delete on top of three medium hooks, so a
concrete backend only decides where the serialized blob lives.
"""

import logging
import threading
from abc import abstractmethod
from typing import Any

from bindlib.core.models import BindingKind, PointBinding, SceneBinding

from ..events import ShutdownNotifier
from ..serialization import decode_library, encode_library
from .base import BindingLibrary

logger = logging.getLogger(__name__)

# Rough serialized sizes, only used to pre-size the encode buffer
BYTES_PER_POINT_BINDING = 64
# A typical recognized scene holds about four anchors
BYTES_PER_SCENE_BINDING = 4 * BYTES_PER_POINT_BINDING


class BindingDictionary:
    """In-memory point and scene binding maps."""

    def __init__(self):
        self._points: dict[str, PointBinding] = {}
        self._scenes: dict[str, SceneBinding] = {}
        self._lock = threading.RLock()

    def _map(self, kind: BindingKind) -> dict[str, Any]:
        return self._points if kind is BindingKind.POINT else self._scenes

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding both maps."""
        return self._lock

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def scene_count(self) -> int:
        return len(self._scenes)

    @property
    def estimated_size_bytes(self) -> int:
        """Approximate serialized size of the current contents."""
        return (
            BYTES_PER_POINT_BINDING * len(self._points)
            + BYTES_PER_SCENE_BINDING * len(self._scenes)
        )

    def get(self, kind: BindingKind, key: str) -> tuple[bool, Any]:
        with self._lock:
            data = self._map(kind)
            if key in data:
                return True, data[key]
            return False, None

    def set(self, kind: BindingKind, key: str, binding: Any) -> None:
        if not isinstance(binding, kind.value_type):
            raise TypeError(
                f"{kind.name.lower()} bindings must be {kind.value_type.__name__}, "
                f"got {type(binding).__name__}"
            )
        with self._lock:
            data = self._map(kind)
            data.pop(key, None)
            data[key] = binding

    def remove(self, kind: BindingKind, key: str) -> None:
        with self._lock:
            self._map(kind).pop(key, None)

    def keys(self, kind: BindingKind) -> list[str]:
        with self._lock:
            return list(self._map(kind).keys())

    def clear(self) -> None:
        with self._lock:
            self._points.clear()
            self._scenes.clear()

    def snapshot(self) -> tuple[dict[str, PointBinding], dict[str, SceneBinding]]:
        """Copy both maps."""
        with self._lock:
            return dict(self._points), dict(self._scenes)

    def replace(
        self,
        points: dict[str, PointBinding],
        scenes: dict[str, SceneBinding],
    ) -> None:
        """Replace both maps at once."""
        with self._lock:
            self._points = dict(points)
            self._scenes = dict(scenes)


class DictionaryLibrary(BindingLibrary):
    """Binding library holding its data in a BindingDictionary.

    Subclasses implement the medium hooks. Hooks may raise; every failure is
    caught, logged and turned into a False load result or a no-op save.
    """

    def __init__(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        notifier: ShutdownNotifier | None = None,
    ):
        self._bindings = BindingDictionary()
        super().__init__(library_id, persist_on_shutdown, notifier)

    @property
    def point_bindings_count(self) -> int:
        return self._bindings.point_count

    @property
    def scene_bindings_count(self) -> int:
        return self._bindings.scene_count

    @property
    def estimated_size_bytes(self) -> int:
        """Approximate serialized size of this library."""
        return self._bindings.estimated_size_bytes

    def try_get(self, kind: BindingKind, key: str) -> tuple[bool, Any]:
        return self._bindings.get(kind, key)

    def set(self, kind: BindingKind, key: str, binding: Any) -> None:
        self._bindings.set(kind, key, binding)

    def remove(self, kind: BindingKind, key: str) -> None:
        self._bindings.remove(kind, key)

    def keys(self, kind: BindingKind) -> list[str]:
        return self._bindings.keys(kind)

    def clear(self) -> None:
        self._bindings.clear()

    def snapshot(self) -> tuple[dict[str, PointBinding], dict[str, SceneBinding]]:
        """Copy of the current point and scene maps."""
        return self._bindings.snapshot()

    def serialize(self) -> bytes:
        """Encode the whole library state."""
        with self._bindings.lock:
            points, scenes = self._bindings.snapshot()
            size_hint = self._bindings.estimated_size_bytes
        return encode_library(self.library_id, points, scenes, size_hint)

    def deserialize(self, data: bytes) -> None:
        """Replace the library state with a decoded blob.

        Raises:
            MalformedLibraryError: If data cannot be decoded.
        """
        envelope = decode_library(self.library_id, data)
        self._bindings.replace(envelope.point_bindings, envelope.scene_bindings)

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of this library on its medium."""
        pass

    @abstractmethod
    def _read_blob(self) -> bytes | None:
        """Read the stored blob, or None if the medium has no data."""
        pass

    @abstractmethod
    def _write_blob(self, data: bytes) -> None:
        """Write the blob, replacing previous contents."""
        pass

    @abstractmethod
    def _delete_blob(self) -> None:
        """Remove the stored blob if present."""
        pass

    def load(self) -> bool:
        try:
            data = self._read_blob()
            if not data:
                logger.info(
                    f"Couldn't load {self.library_id} from {self.location}: no data found"
                )
                return False

            self.deserialize(data)
            logger.info(
                f"Loaded library {self.library_id} | point bindings: "
                f"{self.point_bindings_count} | scene bindings: "
                f"{self.scene_bindings_count} | size: {len(data)} bytes"
            )
            return True
        except Exception as e:
            logger.error(
                f"Error while loading library {self.library_id}. "
                f"{type(e).__name__}: {e}"
            )
            return False

    def save(self) -> None:
        try:
            data = self.serialize()
            self._write_blob(data)
            logger.info(
                f"Saved library {self.library_id} to {self.location}. "
                f"Size: {len(data)} bytes"
            )
        except Exception as e:
            logger.error(
                f"Error while saving library {self.library_id}. "
                f"{type(e).__name__}: {e}"
            )

    def delete(self) -> None:
        self.clear()
        try:
            self._delete_blob()
            logger.info(f"Deleted library {self.library_id} from {self.location}")
        except Exception as e:
            logger.error(
                f"Couldn't delete library {self.library_id} at {self.location}. "
                f"{type(e).__name__}: {e}"
            )
