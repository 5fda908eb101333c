"""Pluggable binding library backends.

Provides a unified library interface over different durable media:

- **FileLibrary**: one binary file per library
- **SecureStoreLibrary**: one blob per library in a secure key-value store

Both share the in-memory dictionary implementation of DictionaryLibrary.
"""

from .base import BindingLibrary, LibraryFactory
from .dictionary import BindingDictionary, DictionaryLibrary
from .filesystem import FileLibrary
from .secure import SecureStoreLibrary

__all__ = [
    "BindingDictionary",
    "BindingLibrary",
    "DictionaryLibrary",
    "FileLibrary",
    "LibraryFactory",
    "SecureStoreLibrary",
]
