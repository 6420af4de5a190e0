"""
Locale Switcher - Main Application

Demonstrates switching the UI language at runtime, with the chosen locale
saved to local storage and restored on the next start.
"""

import logging

import streamlit as st

from src.config import get_settings
from src.core import LocaleStore
from src.ui import get_locale_store, render_home_page
from src.ui.i18n import match_locale, set_locale, t
from src.utils import setup_logging

# Setup logging
logger = setup_logging(log_level=get_settings().log_level)


def apply_query_locale(store: LocaleStore) -> None:
    """Honour a ?locale= URL parameter once per session."""
    if st.session_state.get("locale_query_applied"):
        return
    st.session_state["locale_query_applied"] = True

    try:
        raw = st.query_params.get("locale")
    except Exception as e:
        logger.debug(f"Query params unavailable: {e}")
        return

    requested = match_locale(raw)
    if raw and requested is None:
        logger.warning(f"Ignoring unsupported locale in URL: {raw!r}")
        return
    if requested and requested != str(store.current_locale):
        store.change_locale(requested)


def main():
    """Main application entry point."""
    # Configure page: must be the first Streamlit call
    settings = get_settings()
    st.set_page_config(
        page_title=settings.page_title,
        page_icon=settings.page_icon,
        layout=settings.layout
    )

    store = get_locale_store()
    apply_query_locale(store)

    # Read once per render pass; the translator also follows the store
    set_locale(store.current_locale)

    render_home_page(store)

    st.divider()
    st.caption(t("app.subtitle"))


if __name__ == "__main__":
    main()
