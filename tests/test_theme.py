"""
Theme Preference Tests

Init-from-file and write-on-change lifecycle, palettes.
"""

import json

import pytest

from core.theme import ThemePreference, palette, sales_channel_colors, status_color


class TestThemePreference:
    def test_missing_file_uses_default(self, tmp_path):
        store = ThemePreference(tmp_path / "theme.json")
        assert store.theme == "light"
        assert not (tmp_path / "theme.json").exists()

    def test_set_writes_file(self, tmp_path):
        path = tmp_path / "nested" / "theme.json"
        store = ThemePreference(path)
        store.set("dark")
        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}

    def test_reload_reads_saved_value(self, tmp_path):
        path = tmp_path / "theme.json"
        ThemePreference(path).set("dark")
        assert ThemePreference(path).theme == "dark"

    def test_toggle(self, tmp_path):
        store = ThemePreference(tmp_path / "theme.json")
        assert store.toggle() == "dark"
        assert store.is_dark
        assert store.toggle() == "light"

    def test_unknown_theme_rejected(self, tmp_path):
        store = ThemePreference(tmp_path / "theme.json")
        with pytest.raises(ValueError):
            store.set("blue")
        assert store.theme == "light"

    @pytest.mark.parametrize("content", ["not json", '{"theme": "blue"}', "[1, 2]"])
    def test_bad_file_falls_back(self, tmp_path, content):
        path = tmp_path / "theme.json"
        path.write_text(content, encoding="utf-8")
        assert ThemePreference(path).theme == "light"

    def test_custom_default(self, tmp_path):
        assert ThemePreference(tmp_path / "t.json", default="dark").theme == "dark"

    def test_failed_write_keeps_previous_theme(self, tmp_path, monkeypatch):
        path = tmp_path / "theme.json"
        store = ThemePreference(path)

        def fail_save(theme):
            raise OSError("disk full")

        monkeypatch.setattr(store, "_save", fail_save)
        with pytest.raises(OSError):
            store.toggle()
        assert store.theme == "light"
        assert not path.exists()


class TestPalettes:
    def test_status_colors(self):
        assert status_color("Complete") == {"text": "#4AA785", "dot": "#A1E3CB"}
        assert status_color("In Progress", "dark")["dot"] == "#95A4FC"

    def test_rejected_depends_on_theme(self):
        assert status_color("Rejected", "light")["text"] == "#1C1C1C66"
        assert status_color("Rejected", "dark")["text"] == "#FFFFFF66"

    def test_unknown_status(self):
        assert status_color("Lost") == {"text": "#000", "dot": "#000"}

    def test_palette_fallback(self):
        assert palette("sepia") == palette("light")

    def test_sales_channel_colors(self):
        assert sales_channel_colors("dark")[0] == "#C6C7F8"
        assert sales_channel_colors("light")[0] == "#1C1C1C"
