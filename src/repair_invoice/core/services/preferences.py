from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

PREFERENCES_PATH = Path(__file__).resolve().parents[2] / "data" / "preferences.json"
PREFERENCES_ENV = "REPAIR_INVOICE_PREFERENCES"
THEME_KEY = "selected-invoice-template"


def _target(path: Path | None) -> Path:
    if path is not None:
        return Path(path)
    override = os.environ.get(PREFERENCES_ENV)
    return Path(override) if override else PREFERENCES_PATH


def load_preferences(path: Path | None = None) -> dict:
    target = _target(path)
    if target.exists():
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", target, exc)
            return {}
        if isinstance(data, dict):
            return data
        logger.warning("Ignoring preferences file %s: expected a JSON object", target)
    return {}


def load_theme_preference(path: Path | None = None) -> str | None:
    """Saved theme id, or None when nothing usable was saved."""
    value = load_preferences(path).get(THEME_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def save_theme_preference(theme_id: str, path: Path | None = None) -> Path:
    target = _target(path)
    data = load_preferences(target)
    data[THEME_KEY] = theme_id
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return target
