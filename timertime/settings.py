"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/TimerTime/settings.json

Usage::

    settings = load_settings()
    settings.dark_mode = True
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .ui.hourglass import DEFAULT_SPEED, is_valid_speed


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TimerTime"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── appearance ────────────────────────────────────────────────────
    dark_mode: bool = False
    animation_speed: float = DEFAULT_SPEED  # hourglass playback rate

    # ── session ───────────────────────────────────────────────────────
    restore_session: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 360
    window_height: int = 640

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            speed = filtered.get("animation_speed", DEFAULT_SPEED)
            if not is_valid_speed(speed):
                logger.warning(
                    "Ignoring animation_speed %r, using %s", speed, DEFAULT_SPEED,
                )
                filtered["animation_speed"] = DEFAULT_SPEED
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.debug("Saved settings to %s", SETTINGS_PATH)
