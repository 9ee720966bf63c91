"""Dashboard configuration constants.

Environment variables (or a `.env` file at the repository root) override the
defaults for paths, logging and CORS.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[1]

load_dotenv(BASE_DIR / ".env")

# ---------- Theme ----------
THEMES: Tuple[str, ...] = ("light", "dark")
DEFAULT_THEME = "light"
THEME_FILE = Path(os.getenv("ADMIN_DASH_THEME_FILE", str(BASE_DIR / ".theme.json")))

# ---------- Order table ----------
PAGE_SIZE_OPTIONS: Tuple[int, ...] = (10, 20, 50)
DEFAULT_PAGE_SIZE = 10
STATUS_ALL = "All"

# ---------- Logging ----------
LOG_LEVEL = os.getenv("ADMIN_DASH_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("ADMIN_DASH_LOG_FILE") or None
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ---------- API ----------
def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _split_origins(
    os.getenv("ADMIN_DASH_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
)
