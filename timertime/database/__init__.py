"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import SavedSession
from .snapshots import save_snapshot, load_snapshot, clear_snapshot

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "SavedSession",
    "save_snapshot",
    "load_snapshot",
    "clear_snapshot",
]
