"""
Tests for settings loading and deep merge logic.

Uses real TOML files on disk (no mocking).
"""

import toml

from promptdeck.utils.helpers import DEFAULT_SETTINGS, _deep_merge, load_settings


class TestDeepMerge:
    """Test the _deep_merge function directly."""

    def test_override_replaces_flat_key(self):
        base = {"a": 1, "b": 2}
        override = {"b": 99}
        assert _deep_merge(base, override) == {"a": 1, "b": 99}

    def test_override_adds_new_key(self):
        assert _deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_nested_dicts_are_merged(self):
        base = {"section": {"a": 1, "b": 2}}
        override = {"section": {"b": 99, "c": 3}}
        assert _deep_merge(base, override) == {"section": {"a": 1, "b": 99, "c": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base["a"]["x"] == 1


class TestLoadSettings:
    """Test load_settings with real TOML files."""

    def test_returns_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings == DEFAULT_SETTINGS
        assert settings["notifications"]["duration_ms"] == 6000

    def test_loaded_values_override_defaults(self, tmp_settings):
        settings = load_settings(tmp_settings)
        assert settings["matcher"]["base_url"] == "http://matcher.test"
        assert settings["matcher"]["timeout_s"] == 3.0
        assert settings["notifications"]["duration_ms"] == 4000
        # Untouched keys keep their defaults
        assert settings["matcher"]["connect_timeout_s"] == 5.0
        assert settings["panels"]["workspace_height"] == 600

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("[matcher\nbase_url = ")
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_defaults_not_mutated_by_load(self, tmp_settings):
        settings = load_settings(tmp_settings)
        settings["matcher"]["base_url"] = "changed"
        assert DEFAULT_SETTINGS["matcher"]["base_url"] == "http://localhost:8000"

    def test_shipped_settings_file_parses(self):
        from promptdeck.utils.helpers import SETTINGS_PATH
        data = toml.load(SETTINGS_PATH)
        assert set(data) <= set(DEFAULT_SETTINGS)
