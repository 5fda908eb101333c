"""Binding library registry.

The registry owns the live library instances of the process, at most one per
library id. Libraries are created through a pluggable factory and loaded from
their medium on first access; if nothing is stored yet a fresh library is
used instead.

Besides explicitly requested libraries, the registry tracks a *current*
library. If no current library was ever selected, the first access loads
DEFAULT_LIBRARY_ID and marks it to be saved on shutdown.
"""

import logging
import threading

from .backends.base import BindingLibrary, LibraryFactory
from .backends.secure import DEFAULT_NAMESPACE, SecureStoreLibrary
from .events import ShutdownNotifier, get_shutdown_notifier
from .stores import SecureStore

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_ID = "DefaultLibrary"


class LibraryRegistry:
    """Manages unique live binding library instances by id."""

    def __init__(
        self,
        factory: LibraryFactory | None = None,
        notifier: ShutdownNotifier | None = None,
        secure_store: SecureStore | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        default_library_id: str = DEFAULT_LIBRARY_ID,
    ):
        self.notifier = notifier or get_shutdown_notifier()
        self.default_library_id = default_library_id
        self._secure_store = secure_store
        self._namespace = namespace
        self._factory = factory
        self._default_factory: LibraryFactory | None = None
        self._loaded: dict[str, BindingLibrary] = {}
        self._current: BindingLibrary | None = None
        self._lock = threading.RLock()

    @property
    def factory(self) -> LibraryFactory:
        """Factory used to create every newly loaded library.

        Defaults to SecureStoreLibrary when unset or set to None.
        """
        if self._factory is not None:
            return self._factory
        if self._default_factory is None:
            self._default_factory = SecureStoreLibrary.factory(
                store=self._secure_store,
                namespace=self._namespace,
                notifier=self.notifier,
            )
        return self._default_factory

    @factory.setter
    def factory(self, value: LibraryFactory | None) -> None:
        self._factory = value

    @property
    def loaded_libraries(self) -> list[BindingLibrary]:
        """Snapshot of all live library instances."""
        with self._lock:
            return list(self._loaded.values())

    def is_loaded(self, library_id: str) -> bool:
        """Check if a live instance exists for library_id."""
        with self._lock:
            return library_id in self._loaded

    @property
    def current(self) -> BindingLibrary:
        """Library used when callers don't name one."""
        with self._lock:
            if self._current is None:
                return self.set_current_library(self.default_library_id, True, False)
            return self._current

    def set_current_library(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        force_reload: bool = False,
    ) -> BindingLibrary | None:
        """Select the current library, loading or creating it if needed."""
        with self._lock:
            self._current = self.get_library(library_id, persist_on_shutdown, force_reload)
            return self._current

    def save_current_library(self) -> None:
        """Save the current library, if one was selected."""
        with self._lock:
            current = self._current
        if current is not None:
            current.save()

    def get_library(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        force_reload: bool = False,
    ) -> BindingLibrary | None:
        """Get the live library for library_id.

        If no instance is live (or force_reload is set) a new one is created
        with the factory and loaded from its medium; a library with no stored
        data starts empty. Otherwise the live instance is returned with its
        persist_on_shutdown flag updated.

        Returns:
            The library, or None if library_id is empty.
        """
        if not library_id:
            return None

        with self._lock:
            library = self._loaded.get(library_id)
            if library is not None and not force_reload:
                library.persist_on_shutdown = persist_on_shutdown
                return library

            library = self.factory(library_id, persist_on_shutdown)
            # Shutdown saves of live libraries go through this registry
            library.attach(self.notifier)
            if not library.load():
                logger.info(f"Library {library_id} was not found, new instance will be created")

            previous = self._loaded.get(library_id)
            if previous is not None and previous is not library:
                self._detach(previous)
                if self._current is previous:
                    self._current = library
            self._loaded[library_id] = library
            return library

    def save_library(self, library_id: str, unload: bool = False) -> None:
        """Save a live library, optionally unloading it afterwards."""
        with self._lock:
            library = self._loaded.get(library_id)
            if library is None:
                return

            library.save()
            if unload:
                self._remove(library_id)

    def unload_library(self, library_id: str, save: bool = True) -> None:
        """Remove a live library, saving it first by default."""
        with self._lock:
            library = self._loaded.get(library_id)
            if library is None:
                return

            if save:
                library.save()
            self._remove(library_id)

    def delete_library(self, library_id: str) -> None:
        """Delete a library from its medium and unload it."""
        with self._lock:
            library = self.get_library(library_id)
            if library is None:
                return

            library.delete()
            self._remove(library_id)

    def save_all_libraries(self, unload: bool = False) -> None:
        """Save every live library, optionally unloading all of them."""
        with self._lock:
            for library in list(self._loaded.values()):
                library.save()

            if unload:
                self._remove_all()

    def unload_all_libraries(self, save: bool = True) -> None:
        """Unload every live library, saving them first by default."""
        with self._lock:
            if save:
                self.save_all_libraries(unload=True)
            else:
                self._remove_all()

    def shutdown(self) -> None:
        """Run shutdown saves for every library registered for them."""
        self.notifier.fire()

    def _remove(self, library_id: str) -> None:
        library = self._loaded.pop(library_id, None)
        if library is not None:
            self._detach(library)

    def _remove_all(self) -> None:
        for library_id in list(self._loaded.keys()):
            self._remove(library_id)

    def _detach(self, library: BindingLibrary) -> None:
        # Instances outside the live set no longer write to the medium on shutdown
        library.persist_on_shutdown = False


_registry: LibraryRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> LibraryRegistry:
    """Get the process-wide registry, creating it from configuration."""
    global _registry
    with _registry_lock:
        if _registry is None:
            from bindlib.config import create_registry, load_config

            _registry = create_registry(load_config())
            _registry.notifier.install_atexit()
        return _registry


def set_registry(registry: LibraryRegistry | None) -> None:
    """Replace the process-wide registry (None resets it)."""
    global _registry
    with _registry_lock:
        _registry = registry
