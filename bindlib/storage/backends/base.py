"""Base binding library interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from bindlib.core.models import BindingKind, PointBinding, SceneBinding

from ..events import ShutdownNotifier, get_shutdown_notifier
from ..exceptions import InvalidLibraryIdError

LibraryFactory = Callable[[str, bool], "BindingLibrary"]


class BindingLibrary(ABC):
    """Abstract base class for binding libraries.

    A library holds point and scene bindings under string keys and knows how
    to load and save them as a whole. Every library has a unique, immutable
    identifier.

    Subclasses should be created through a LibraryFactory so the registry can
    manage one live instance per identifier.
    """

    def __init__(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        notifier: ShutdownNotifier | None = None,
    ):
        if not library_id:
            raise InvalidLibraryIdError(library_id)

        self._library_id = library_id
        self._notifier = notifier or get_shutdown_notifier()
        self._persist_on_shutdown = False
        self.persist_on_shutdown = persist_on_shutdown

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._library_id!r})"

    @property
    def library_id(self) -> str:
        """Unique library identifier."""
        return self._library_id

    @property
    def notifier(self) -> ShutdownNotifier:
        """Shutdown notifier this library subscribes to."""
        return self._notifier

    def attach(self, notifier: ShutdownNotifier) -> None:
        """Move the shutdown subscription to another notifier."""
        if notifier is self._notifier:
            return

        if self._persist_on_shutdown:
            self._notifier.unsubscribe(self._on_shutdown)
            notifier.subscribe(self._on_shutdown)
        self._notifier = notifier

    @property
    def persist_on_shutdown(self) -> bool:
        """Whether the library saves itself when the application quits."""
        return self._persist_on_shutdown

    @persist_on_shutdown.setter
    def persist_on_shutdown(self, value: bool) -> None:
        value = bool(value)
        if value == self._persist_on_shutdown:
            return

        if value:
            self._notifier.subscribe(self._on_shutdown)
        else:
            self._notifier.unsubscribe(self._on_shutdown)
        self._persist_on_shutdown = value

    def _on_shutdown(self) -> None:
        self.save()

    @property
    @abstractmethod
    def point_bindings_count(self) -> int:
        """Number of point bindings in this library."""
        pass

    @property
    @abstractmethod
    def scene_bindings_count(self) -> int:
        """Number of scene bindings in this library."""
        pass

    @abstractmethod
    def try_get(self, kind: BindingKind, key: str) -> tuple[bool, Any]:
        """Look up a binding.

        Returns:
            Tuple of (found, binding). Binding is None when not found.
        """
        pass

    @abstractmethod
    def set(self, kind: BindingKind, key: str, binding: Any) -> None:
        """Store a binding under key, replacing any previous one."""
        pass

    @abstractmethod
    def remove(self, kind: BindingKind, key: str) -> None:
        """Remove the binding stored under key (if any)."""
        pass

    @abstractmethod
    def keys(self, kind: BindingKind) -> list[str]:
        """Get all keys of the given kind."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear in-memory library data (the medium is left untouched)."""
        pass

    @abstractmethod
    def load(self) -> bool:
        """Load library data from the medium, discarding unsaved changes.

        Returns:
            True if data was found and loaded.
        """
        pass

    @abstractmethod
    def save(self) -> None:
        """Save library data to the medium, overwriting the previous save."""
        pass

    @abstractmethod
    def delete(self) -> None:
        """Clear library data and remove it from the medium."""
        pass

    def try_get_point_binding(self, key: str) -> tuple[bool, PointBinding | None]:
        """Look up a point binding."""
        return self.try_get(BindingKind.POINT, key)

    def set_point_binding(self, key: str, binding: PointBinding) -> None:
        """Store a point binding."""
        self.set(BindingKind.POINT, key, binding)

    def remove_point_binding(self, key: str) -> None:
        """Remove a point binding."""
        self.remove(BindingKind.POINT, key)

    def try_get_scene_binding(self, key: str) -> tuple[bool, SceneBinding | None]:
        """Look up a scene binding."""
        return self.try_get(BindingKind.SCENE, key)

    def set_scene_binding(self, key: str, binding: SceneBinding) -> None:
        """Store a scene binding."""
        self.set(BindingKind.SCENE, key, binding)

    def remove_scene_binding(self, key: str) -> None:
        """Remove a scene binding."""
        self.remove(BindingKind.SCENE, key)

    def point_keys(self) -> list[str]:
        """Get all point binding keys."""
        return self.keys(BindingKind.POINT)

    def scene_keys(self) -> list[str]:
        """Get all scene binding keys."""
        return self.keys(BindingKind.SCENE)
