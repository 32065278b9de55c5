"""Tests for settings and favorites storage."""

import json

import pytest

from tiempo_mcp.preferences import PreferenceStore


@pytest.fixture
def prefs_path(tmp_path):
    return tmp_path / "prefs" / "preferences.json"


@pytest.fixture
def store(prefs_path):
    return PreferenceStore(prefs_path)


class TestSettings:
    def test_defaults(self, store, prefs_path):
        assert store.settings.use_vosotros is True
        assert store.favorites() == []
        assert not prefs_path.exists()

    def test_update_persists(self, store, prefs_path):
        settings = store.update_settings(use_vosotros=False)
        assert settings.use_vosotros is False
        assert PreferenceStore(prefs_path).settings.use_vosotros is False

    def test_settings_copy_is_detached(self, store):
        settings = store.settings
        settings.use_vosotros = False
        assert store.settings.use_vosotros is True

    def test_reset(self, store, prefs_path):
        store.update_settings(use_vosotros=False)
        store.reset_settings()
        assert PreferenceStore(prefs_path).settings.use_vosotros is True

    def test_corrupt_file_uses_defaults(self, prefs_path):
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("{not json")
        store = PreferenceStore(prefs_path)
        assert store.settings.use_vosotros is True
        assert store.favorites() == []


class TestFavorites:
    def test_add_and_remove(self, store):
        store.add_favorite("vivir")
        store.add_favorite("comer")
        store.add_favorite("vivir")
        assert store.favorites() == ["comer", "vivir"]
        assert store.favorite_count() == 2
        assert store.is_favorite("comer")

        store.remove_favorite("comer")
        store.remove_favorite("nadar")
        assert store.favorites() == ["vivir"]

    def test_toggle(self, store):
        assert store.toggle_favorite("ser") is True
        assert store.is_favorite("ser")
        assert store.toggle_favorite("ser") is False
        assert not store.is_favorite("ser")

    def test_file_format(self, store, prefs_path):
        store.add_favorite("oír")
        store.update_settings(use_vosotros=False)
        data = json.loads(prefs_path.read_text())
        assert data == {"settings": {"use_vosotros": False}, "favorites": ["oír"]}
        assert PreferenceStore(prefs_path).favorites() == ["oír"]
