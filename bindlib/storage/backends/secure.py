"""Secure store binding library backend."""

from ..events import ShutdownNotifier
from ..exceptions import StorageMediumError
from ..stores import SecureStore, SQLiteSecureStore, StoreStatus
from .base import LibraryFactory
from .dictionary import DictionaryLibrary

DEFAULT_NAMESPACE = "BindingLibrary"


class SecureStoreLibrary(DictionaryLibrary):
    """Binding library stored as one blob in a secure key-value store.

    The blob is kept under ``<namespace>/<library_id>``.
    """

    def __init__(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        notifier: ShutdownNotifier | None = None,
        store: SecureStore | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        self._store = store if store is not None else SQLiteSecureStore()
        self._namespace = namespace
        super().__init__(library_id, persist_on_shutdown, notifier)

    @classmethod
    def factory(
        cls,
        store: SecureStore | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        notifier: ShutdownNotifier | None = None,
    ) -> LibraryFactory:
        """Create a LibraryFactory producing secure store libraries.

        All libraries created by the factory share one store instance.
        """
        shared_store = store if store is not None else SQLiteSecureStore()

        def create(
            library_id: str, persist_on_shutdown: bool = True
        ) -> "SecureStoreLibrary":
            return cls(
                library_id,
                persist_on_shutdown,
                notifier=notifier,
                store=shared_store,
                namespace=namespace,
            )

        return create

    @property
    def store(self) -> SecureStore:
        return self._store

    @property
    def storage_key(self) -> str:
        """Key of this library's blob in the secure store."""
        return f"{self._namespace}/{self.library_id}"

    @property
    def location(self) -> str:
        return f"secure store key {self.storage_key}"

    def _read_blob(self) -> bytes | None:
        result = self._store.get(self.storage_key)
        if result.status is StoreStatus.NOT_FOUND:
            return None
        if not result.ok:
            raise StorageMediumError(self.location, str(result))
        return result.data

    def _write_blob(self, data: bytes) -> None:
        result = self._store.put(self.storage_key, data)
        if not result.ok:
            raise StorageMediumError(self.location, str(result))

    def _delete_blob(self) -> None:
        result = self._store.delete(self.storage_key)
        if not result.ok and result.status is not StoreStatus.NOT_FOUND:
            raise StorageMediumError(self.location, str(result))
