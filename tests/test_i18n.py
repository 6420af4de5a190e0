#!/usr/bin/env python3
"""
Tests for string tables, locale normalization and the store-bound translator.
"""

import asyncio
import importlib.util
from pathlib import Path

from src.config import Settings
from src.core import InMemoryKeyValueStore, LocaleStore, LOCALE_KEY
from src.ui.i18n import (
    TRANSLATIONS,
    Translator,
    available_locales,
    get_translator,
    match_locale,
    normalize_locale,
)
from src.ui.locale_provider import build_locale_store


def test_tables_cover_title_and_welcome():
    for code in ("en", "my"):
        assert TRANSLATIONS[code]["title"]
        assert TRANSLATIONS[code]["welcome"]


def test_match_and_normalize_locale():
    assert match_locale("en-US") == "en"
    assert match_locale("MY") == "my"
    assert match_locale("my_MM") == "my"
    assert match_locale("fr") is None
    assert match_locale(None) is None
    assert normalize_locale("fr") == "en"
    assert normalize_locale("") == "en"


def test_available_locales_lists_display_names():
    assert available_locales() == [("en", "English"), ("my", "မြန်မာ")]


def test_translator_follows_store():
    async def run():
        store = LocaleStore(InMemoryKeyValueStore())
        await store.loaded()
        translator = Translator(store)
        assert translator.t("title") == TRANSLATIONS["en"]["title"]

        store.change_locale("my")
        assert translator.locale == "my"
        assert translator.t("welcome") == TRANSLATIONS["my"]["welcome"]
        await store.flush()

    asyncio.run(run())


def test_translator_fallbacks_and_formatting():
    translator = Translator(locale="my")
    assert translator.t("missing.key", "Fallback") == "Fallback"
    assert translator.t("missing.key") == "missing.key"
    assert "English" in translator.t("home.current_locale", language="English")

    translator.set_locale("xx")
    assert translator.t("title") == TRANSLATIONS["en"]["title"]


def test_build_locale_store_binds_global_translator(tmp_path):
    settings = Settings(state_dir=str(tmp_path))
    storage = InMemoryKeyValueStore({LOCALE_KEY: "my"})

    store = build_locale_store(settings, storage)

    assert str(store.current_locale) == "my"
    assert get_translator().locale == "my"
    store.change_locale("en")
    assert get_translator().locale == "en"
    assert storage.data[LOCALE_KEY] == "en"


def _load_checker():
    path = Path(__file__).parent.parent / "scripts" / "check_ui_i18n.py"
    spec = importlib.util.spec_from_file_location("check_ui_i18n", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_checker_flags_hardcoded_strings(tmp_path):
    checker = _load_checker()
    source = tmp_path / "page.py"
    source.write_text(
        "import streamlit as st\n"
        "st.header('Hello')\n"
        "st.header(t('title'))\n"
        "st.caption('Ignored')  # no-i18n\n"
        "st.markdown('🌐')\n",
        encoding="utf-8",
    )
    issues = checker.scan_file(source)
    assert [ln for ln, _ in issues] == [2]


def test_checker_reports_missing_keys():
    checker = _load_checker()
    tables = {"en": {"title": "T", "welcome": "W"}, "my": {"title": "T"}}
    assert checker.check_tables(tables) == ["locale 'my' is missing key 'welcome'"]
    assert checker.check_tables(TRANSLATIONS) == []
