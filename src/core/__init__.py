from .storage import KeyValueStore, FileKeyValueStore, InMemoryKeyValueStore, StorageError
from .locale_store import Locale, LocaleState, LocaleStore, LOCALE_KEY, DEFAULT_LOCALE

__all__ = [
    "KeyValueStore",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "StorageError",
    "Locale",
    "LocaleState",
    "LocaleStore",
    "LOCALE_KEY",
    "DEFAULT_LOCALE",
]
