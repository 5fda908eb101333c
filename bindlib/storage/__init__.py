"""Binding library storage layer.

- **Backends**: file and secure-store libraries behind one interface
- **Registry**: unique live library instances per id, current library
- **Stores**: secure key-value stores used by the secure backend
- **Serialization**: versioned whole-library MessagePack envelope
- **Shutdown**: save-on-quit notification for libraries
"""

from bindlib.storage.backends import (
    BindingDictionary,
    BindingLibrary,
    DictionaryLibrary,
    FileLibrary,
    LibraryFactory,
    SecureStoreLibrary,
)
from bindlib.storage.events import ShutdownNotifier, get_shutdown_notifier
from bindlib.storage.exceptions import (
    BindingLibraryError,
    InvalidLibraryIdError,
    MalformedLibraryError,
    StorageMediumError,
)
from bindlib.storage.registry import (
    DEFAULT_LIBRARY_ID,
    LibraryRegistry,
    get_registry,
    set_registry,
)
from bindlib.storage.serialization import (
    FORMAT_VERSION,
    LibraryEnvelope,
    decode_library,
    encode_library,
)
from bindlib.storage.stores import (
    MemorySecureStore,
    SecureStore,
    SQLiteSecureStore,
    StoreResult,
    StoreStatus,
)

__all__ = [
    # Backends
    "BindingLibrary",
    "BindingDictionary",
    "DictionaryLibrary",
    "FileLibrary",
    "LibraryFactory",
    "SecureStoreLibrary",
    # Registry
    "DEFAULT_LIBRARY_ID",
    "LibraryRegistry",
    "get_registry",
    "set_registry",
    # Shutdown
    "ShutdownNotifier",
    "get_shutdown_notifier",
    # Errors
    "BindingLibraryError",
    "InvalidLibraryIdError",
    "MalformedLibraryError",
    "StorageMediumError",
    # Serialization
    "FORMAT_VERSION",
    "LibraryEnvelope",
    "decode_library",
    "encode_library",
    # Stores
    "MemorySecureStore",
    "SecureStore",
    "SQLiteSecureStore",
    "StoreResult",
    "StoreStatus",
]
