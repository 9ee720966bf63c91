"""Light/dark theme preference and the palettes that depend on it."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.config import DEFAULT_THEME, THEME_FILE, THEMES

logger = logging.getLogger(__name__)


class ThemePreference:
    """
    Process-wide theme flag backed by a small JSON file.

    The value is read once from the file on construction (missing or unreadable
    file -> default theme) and written back on every change.
    """

    def __init__(self, path: Union[str, Path, None] = None, default: str = DEFAULT_THEME):
        if default not in THEMES:
            raise ValueError(f"Unknown theme: {default!r}")
        self.path = Path(path) if path is not None else THEME_FILE
        self.default = default
        self._theme = self._load()

    def _load(self) -> str:
        if not self.path.exists():
            return self.default
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable theme file %s: %s", self.path, exc)
            return self.default
        theme = raw.get("theme") if isinstance(raw, dict) else None
        if theme not in THEMES:
            logger.warning("Ignoring unknown theme %r in %s", theme, self.path)
            return self.default
        return theme

    def _save(self, theme: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"theme": theme}), encoding="utf-8")

    @property
    def theme(self) -> str:
        return self._theme

    @property
    def is_dark(self) -> bool:
        return self._theme == "dark"

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        # in-memory value only changes once the file write succeeded
        self._save(theme)
        self._theme = theme
        logger.info("Theme set to %s", theme)
        return self._theme

    def toggle(self) -> str:
        return self.set("light" if self.is_dark else "dark")


_STATUS_COLORS: Dict[str, Dict[str, str]] = {
    "In Progress": {"text": "#8A8CD9", "dot": "#95A4FC"},
    "Complete": {"text": "#4AA785", "dot": "#A1E3CB"},
    "Pending": {"text": "#59A8D4", "dot": "#B1E3FF"},
    "Approved": {"text": "#FFC555", "dot": "#FFE999"},
}
_FALLBACK_STATUS_COLOR = {"text": "#000", "dot": "#000"}


def status_color(status: Optional[str], theme: str = DEFAULT_THEME) -> Dict[str, str]:
    if status == "Rejected":
        muted = "#FFFFFF66" if theme == "dark" else "#1C1C1C66"
        return {"text": muted, "dot": muted}
    return dict(_STATUS_COLORS.get(status or "", _FALLBACK_STATUS_COLOR))


PALETTES: Dict[str, Dict[str, str]] = {
    "light": {
        "background": "#FFFFFF",
        "text": "#000000",
        "grid": "#E5E5E5",
        "card": "#F7F9FB",
        "bar_actual": "#A8C5DA",
        "bar_projected": "#E3F5FF",
        "line_current": "#1C1C1C",
        "line_previous": "#A8C5DA",
        "location_bar": "#A8C5DA",
    },
    "dark": {
        "background": "#1C1C1C",
        "text": "#FFFFFF",
        "grid": "#555555",
        "card": "#282828",
        "bar_actual": "#6B7280",
        "bar_projected": "#4B5563",
        "line_current": "#C6C7F8",
        "line_previous": "#A8C5DA",
        "location_bar": "#4B5563",
    },
}


def sales_channel_colors(theme: str) -> List[str]:
    direct = "#C6C7F8" if theme == "dark" else "#1C1C1C"
    return [direct, "#BAEDBD", "#95A4FC", "#B1E3FF"]


def palette(theme: str) -> Dict[str, str]:
    return PALETTES.get(theme, PALETTES[DEFAULT_THEME])
