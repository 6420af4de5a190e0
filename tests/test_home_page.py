#!/usr/bin/env python3
"""
UI test for the home page: pressing a language button switches the
rendered strings on the next run.
"""

from streamlit.testing.v1 import AppTest

from src.ui.i18n import TRANSLATIONS


def _home_script():
    import streamlit as st

    from src.core import InMemoryKeyValueStore, LocaleStore
    from src.ui.home_page import render_home_page
    from src.ui.i18n import get_translator

    if "store" not in st.session_state:
        st.session_state["storage"] = InMemoryKeyValueStore()
        st.session_state["store"] = LocaleStore(st.session_state["storage"])
    store = st.session_state["store"]
    get_translator().bind(store)
    render_home_page(store)


def test_language_button_switches_strings():
    at = AppTest.from_function(_home_script)
    at.run()
    assert not at.exception
    assert at.header[0].value == TRANSLATIONS["en"]["title"]

    at.button(key="locale_button_my").click().run()

    assert not at.exception
    assert at.header[0].value == TRANSLATIONS["my"]["title"]
    assert at.markdown[0].value == TRANSLATIONS["my"]["welcome"]
    assert at.session_state["storage"].data == {"app_locale": "my"}
