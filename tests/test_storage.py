#!/usr/bin/env python3
"""
Tests for the JSON-file and in-memory key-value stores.
"""

import asyncio
import json

import pytest

from src.core import FileKeyValueStore, InMemoryKeyValueStore, StorageError


def test_missing_file_returns_none(tmp_path):
    store = FileKeyValueStore(tmp_path / "preferences.json")
    assert asyncio.run(store.get("app_locale")) is None


def test_set_survives_new_instance(tmp_path):
    path = tmp_path / "preferences.json"

    assert asyncio.run(FileKeyValueStore(path).set("app_locale", "my")) is True
    assert asyncio.run(FileKeyValueStore(path).get("app_locale")) == "my"
    assert json.loads(path.read_text(encoding="utf-8")) == {"app_locale": "my"}
    assert list(tmp_path.glob("*.tmp")) == []


def test_set_keeps_other_keys(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

    store = FileKeyValueStore(path)
    asyncio.run(store.set("app_locale", "en"))
    asyncio.run(store.set("app_locale", "my"))

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "app_locale": "my"}


def test_non_ascii_values_round_trip(tmp_path):
    store = FileKeyValueStore(tmp_path / "preferences.json")
    asyncio.run(store.set("label", "မြန်မာ"))
    assert asyncio.run(store.get("label")) == "မြန်မာ"


def test_corrupt_file_raises_on_read(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        asyncio.run(FileKeyValueStore(path).get("app_locale"))


def test_corrupt_file_is_replaced_on_write(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    store = FileKeyValueStore(path)
    asyncio.run(store.set("app_locale", "my"))
    assert asyncio.run(store.get("app_locale")) == "my"


def test_write_to_missing_directory_raises(tmp_path):
    store = FileKeyValueStore(tmp_path / "missing" / "preferences.json")
    with pytest.raises(StorageError):
        asyncio.run(store.set("app_locale", "my"))


def test_in_memory_store_failures():
    store = InMemoryKeyValueStore({"app_locale": "my"}, fail_reads=True, fail_writes=True)
    with pytest.raises(StorageError):
        asyncio.run(store.get("app_locale"))
    with pytest.raises(StorageError):
        asyncio.run(store.set("app_locale", "en"))
    assert store.data == {"app_locale": "my"}
    assert store.write_count == 0


def test_concurrent_sets_apply_in_order(tmp_path):
    path = tmp_path / "preferences.json"
    store = FileKeyValueStore(path)

    async def run():
        await asyncio.gather(*(store.set("app_locale", code) for code in ("en", "my", "en", "my")))

    asyncio.run(run())
    assert json.loads(path.read_text(encoding="utf-8")) == {"app_locale": "my"}
    assert list(tmp_path.glob("*.tmp")) == []
