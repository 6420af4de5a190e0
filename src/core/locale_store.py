"""
Process-wide holder of the active UI locale.

The store starts on the default locale, restores a previously saved choice in
the background and persists every explicit change. Observers are notified
synchronously, so the UI reflects a change before the write completes.
Storage failures are logged and otherwise ignored: the locale is a
non-critical preference.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Set, Union

from .storage import KeyValueStore

logger = logging.getLogger(__name__)

LOCALE_KEY = "app_locale"
DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class Locale:
    """A language code selecting the active string table."""

    language_code: str

    @classmethod
    def parse(cls, value: Union["Locale", str]) -> "Locale":
        if isinstance(value, Locale):
            return value
        return cls(str(value).strip())

    def __str__(self) -> str:
        return self.language_code


class LocaleState(Enum):
    DEFAULT = "default"
    SET = "set"


LocaleObserver = Callable[[Locale], None]


class LocaleStore:
    """Single source of truth for the active locale."""

    def __init__(
        self,
        storage: KeyValueStore,
        default_locale: Union[Locale, str] = DEFAULT_LOCALE,
        key: str = LOCALE_KEY,
        autoload: bool = True,
    ):
        """
        Create the store on the default locale.

        Args:
            storage: Durable key-value store holding the saved choice
            default_locale: Locale used until a saved one is loaded
            key: Storage key for the saved locale code
            autoload: Start loading the saved locale immediately
        """
        self.storage = storage
        self.key = key
        self.default_locale = Locale.parse(default_locale)

        self._locale = self.default_locale
        self._state = LocaleState.DEFAULT
        self._changed = False
        self._lock = threading.RLock()
        self._observers: List[LocaleObserver] = []
        self._pending: Set[asyncio.Task] = set()
        self._load_task: Optional[asyncio.Task] = None
        self._load_started = False

        if autoload:
            self.start()

    @property
    def current_locale(self) -> Locale:
        return self._locale

    @property
    def state(self) -> LocaleState:
        return self._state

    def start(self) -> Optional[asyncio.Task]:
        """
        Begin loading the saved locale, at most once per store.

        On a running event loop the load is a background task. Without one
        (Streamlit script threads) it runs to completion before returning.
        """
        with self._lock:
            if self._load_started:
                return self._load_task
            self._load_started = True
        self._load_task = self._schedule(self._load_saved_locale())
        return self._load_task

    def subscribe(self, callback: LocaleObserver) -> Callable[[], None]:
        """Register a callback invoked with the new locale after every change."""
        with self._lock:
            self._observers.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: LocaleObserver) -> None:
        with self._lock:
            try:
                self._observers.remove(callback)
            except ValueError:
                pass

    def change_locale(self, new_locale: Union[Locale, str]) -> Optional[asyncio.Task]:
        """
        Switch to a new locale and persist it.

        The in-memory value and all observers are updated before this returns;
        the write runs afterwards. The locale is not validated here.

        Returns:
            The pending write task when called on a running event loop,
            otherwise None (the write already ran)
        """
        locale = Locale.parse(new_locale)
        with self._lock:
            self._changed = True
        self._set_locale(locale)
        return self._schedule(self._persist(locale))

    async def loaded(self) -> None:
        """Wait for the startup load attempt to settle."""
        if self._load_task is not None:
            await self._load_task

    async def flush(self) -> None:
        """Wait for all pending writes."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _set_locale(self, locale: Locale) -> None:
        with self._lock:
            self._locale = locale
            self._state = LocaleState.SET
            observers = tuple(self._observers)

        for callback in observers:
            try:
                callback(locale)
            except Exception as e:
                logger.error(f"Locale observer {callback!r} failed: {e}")

    async def _load_saved_locale(self) -> None:
        try:
            code = await self.storage.get(self.key)
        except Exception as e:
            logger.warning(f"Could not load saved locale, keeping {self._locale}: {e}")
            return

        if not code:
            logger.debug(f"No saved locale, using default {self.default_locale}")
            return

        with self._lock:
            if self._changed:
                # An explicit choice made while loading takes precedence
                logger.debug(f"Ignoring saved locale {code!r}, changed during load")
                return

        logger.info(f"Restored saved locale {code!r}")
        self._set_locale(Locale.parse(code))

    async def _persist(self, locale: Locale) -> None:
        try:
            await self.storage.set(self.key, locale.language_code)
        except Exception as e:
            logger.warning(f"Could not save locale {locale}: {e}")

    def _schedule(self, coro: Awaitable[None]) -> Optional[asyncio.Task]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Plain threads (e.g. Streamlit script runs) have no event loop
            asyncio.run(coro)
            return None

        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task
