from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


NAV_TREE_PATH = os.getenv("NAV_TREE_PATH", "").strip() or "navigation.json"
SITEMAP_CACHE_SECONDS = max(_int_env("SITEMAP_CACHE_SECONDS", 3600), 0)
LOG_LEVEL = (os.getenv("LOG_LEVEL", "").strip() or "INFO").upper()
