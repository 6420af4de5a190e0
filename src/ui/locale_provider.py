import logging
from typing import Optional

import streamlit as st

from ..config import Settings, get_settings
from ..core import FileKeyValueStore, KeyValueStore, LocaleStore
from .i18n import get_translator, normalize_locale

logger = logging.getLogger(__name__)


def build_locale_store(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStore] = None,
) -> LocaleStore:
    """Create a locale store backed by the preferences file and bind the translator to it."""
    settings = settings or get_settings()
    if storage is None:
        storage = FileKeyValueStore(settings.get_state_path())

    store = LocaleStore(
        storage,
        default_locale=normalize_locale(settings.default_locale),
        key=settings.locale_key,
    )
    get_translator().bind(store)
    logger.info(f"Locale store ready with {store.current_locale} ({store.state.value})")
    return store


@st.cache_resource(show_spinner=False)
def get_locale_store() -> LocaleStore:
    """Process-wide locale store, shared across reruns and sessions."""
    return build_locale_store()
