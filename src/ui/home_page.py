import logging

import streamlit as st

from ..core import LocaleStore
from .i18n import LANGUAGE_NAMES, available_locales, t

logger = logging.getLogger(__name__)

NOTICE_KEY = "locale_notice"


def _on_locale_selected(store: LocaleStore, code: str) -> None:
    """Button callback: runs before the rerun, so the new locale renders immediately."""
    logger.info(f"User selected locale {code!r}")
    store.change_locale(code)
    st.session_state[NOTICE_KEY] = code


def render_home_page(store: LocaleStore):
    """Render the home screen with one button per supported language."""
    current = str(store.current_locale)

    notice = st.session_state.pop(NOTICE_KEY, None)
    if notice:
        st.toast(t("home.language_changed", language=LANGUAGE_NAMES.get(notice, notice)))

    st.header(t("title"))
    st.markdown(t("welcome"))
    st.caption(t("home.current_locale", language=LANGUAGE_NAMES.get(current, current)))

    st.divider()
    st.subheader(t("home.choose_language"))

    options = available_locales()
    columns = st.columns(len(options))
    for column, (code, name) in zip(columns, options):
        with column:
            # Language names stay in their own script regardless of the active locale
            st.button(
                name,
                key=f"locale_button_{code}",
                type="primary" if code == current else "secondary",
                width="stretch",
                on_click=_on_locale_selected,
                args=(store, code),
            )
