"""Save and load the one session snapshot kept between launches."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from .db import get_session
from .models import SavedSession
from ..timer.lifecycle import SNAPSHOT_KEYS


logger = logging.getLogger(__name__)


def save_snapshot(snapshot: Mapping[str, Any]) -> None:
    """Replace the saved snapshot with ``snapshot``."""
    with get_session() as db:
        record = db.query(SavedSession).first()
        if record is None:
            record = SavedSession()
            db.add(record)
        for key in SNAPSHOT_KEYS:
            setattr(record, key, snapshot[key])
        record.saved_at = datetime.now()
    logger.info("Saved session snapshot (%s s left)", snapshot["remaining_seconds"])


def load_snapshot() -> dict[str, Any] | None:
    """Return the saved snapshot as a flat dict, or None."""
    with get_session() as db:
        record = db.query(SavedSession).first()
        if record is None:
            return None
        return {key: getattr(record, key) for key in SNAPSHOT_KEYS}


def clear_snapshot() -> None:
    with get_session() as db:
        db.query(SavedSession).delete()
