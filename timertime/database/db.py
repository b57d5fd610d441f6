"""SQLite store for the saved session.

The engine is built on first use and points at the per-user database
file unless :func:`configure_engine` has already swapped in another URL
(the tests use ``sqlite:///:memory:``).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TimerTime"
DB_PATH = APP_SUPPORT_DIR / "timertime.db"

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker[Session]] = None


def _bind(url: str) -> tuple[Engine, sessionmaker[Session]]:
    global _engine, _session_factory
    # Qt timers and the close handler both touch the store
    engine = create_engine(url, connect_args={"check_same_thread": False})
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    _engine, _session_factory = engine, factory
    return engine, factory


def _bound() -> tuple[Engine, sessionmaker[Session]]:
    if _engine is not None and _session_factory is not None:
        return _engine, _session_factory
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening session store at %s", DB_PATH)
    return _bind(f"sqlite:///{DB_PATH}")


def configure_engine(url: str) -> None:
    """Point the store at ``url``, dropping any engine opened before."""
    if _engine is not None:
        _engine.dispose()
    _bind(url)


def init_db() -> None:
    """Create the tables that do not exist yet."""
    engine, _ = _bound()
    Base.metadata.create_all(engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield an ORM session that commits on exit and rolls back on error."""
    _, factory = _bound()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
