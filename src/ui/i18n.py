"""
UI string tables and the translator bound to the locale store.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from ..config import get_settings
from ..core.locale_store import Locale, LocaleStore

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "my": "မြန်မာ",
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Language Switcher",
        "welcome": "Welcome! Pick a language below.",
        "app.subtitle": "Your choice is saved and restored the next time the app starts.",
        "home.current_locale": "Current language: {language}",
        "home.choose_language": "Choose a language",
        "home.language_changed": "Language changed to {language}",
    },
    "my": {
        "title": "ဘာသာစကား ပြောင်းရန်",
        "welcome": "ကြိုဆိုပါတယ်။ အောက်တွင် ဘာသာစကားကို ရွေးချယ်ပါ။",
        "app.subtitle": "သင်ရွေးချယ်ထားသော ဘာသာစကားကို သိမ်းဆည်းထားပြီး နောက်တစ်ကြိမ် ဖွင့်သည့်အခါ ပြန်လည်အသုံးပြုပါမည်။",
        "home.current_locale": "လက်ရှိ ဘာသာစကား - {language}",
        "home.choose_language": "ဘာသာစကား ရွေးချယ်ပါ",
        "home.language_changed": "ဘာသာစကားကို {language} သို့ ပြောင်းလိုက်ပါပြီ",
    },
}


def supported_locales() -> List[str]:
    """Locales with both a string table and an entry in settings."""
    configured = get_settings().supported_locales
    return [code for code in configured if code in TRANSLATIONS] or [FALLBACK_LOCALE]


def available_locales() -> List[Tuple[str, str]]:
    """(code, display name) pairs for the language picker."""
    return [(code, LANGUAGE_NAMES.get(code, code)) for code in supported_locales()]


def match_locale(value: Optional[str]) -> Optional[str]:
    """Map a free-form code such as 'en-US' or 'my_MM' to a supported locale, or None."""
    if not value:
        return None

    candidate = str(value).strip().replace("_", "-")
    supported = supported_locales()
    for code in supported:
        if code.lower() == candidate.lower():
            return code
    language = candidate.split("-", 1)[0].lower()
    for code in supported:
        if code.lower() == language:
            return code
    return None


def normalize_locale(value: Optional[str]) -> str:
    """Like match_locale, but falls back to the configured default."""
    default = get_settings().default_locale
    if default not in TRANSLATIONS:
        default = FALLBACK_LOCALE
    return match_locale(value) or default


class Translator:
    """Looks up UI strings in the table of the store's current locale."""

    def __init__(self, store: Optional[LocaleStore] = None, locale: str = FALLBACK_LOCALE):
        self._lock = threading.RLock()
        self._locale = locale
        self._table = TRANSLATIONS.get(locale, TRANSLATIONS[FALLBACK_LOCALE])
        self._unsubscribe = None
        if store is not None:
            self.bind(store)

    @property
    def locale(self) -> str:
        return self._locale

    def bind(self, store: LocaleStore) -> None:
        """Follow a locale store, switching tables whenever it changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.set_locale(store.current_locale)
        self._unsubscribe = store.subscribe(self.set_locale)

    def set_locale(self, locale) -> None:
        code = str(locale) if isinstance(locale, Locale) else str(locale or "")
        table = TRANSLATIONS.get(code)
        if table is None:
            logger.warning(f"No string table for locale {code!r}, using {FALLBACK_LOCALE}")
            table = TRANSLATIONS[FALLBACK_LOCALE]
        with self._lock:
            self._locale = code
            self._table = table

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        with self._lock:
            text = self._table.get(key)
        if text is None:
            text = TRANSLATIONS[FALLBACK_LOCALE].get(key, default if default is not None else key)
        if kwargs:
            try:
                text = text.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                logger.debug(f"Could not format {key!r} with {kwargs}")
        return text


_translator = Translator()


def get_translator() -> Translator:
    return _translator


def get_locale() -> str:
    return _translator.locale


def set_locale(locale) -> None:
    _translator.set_locale(locale)


def t(key: str, default: Optional[str] = None, **kwargs: Any) -> str:
    """Translate a UI string with the process-wide translator."""
    return _translator.t(key, default, **kwargs)
