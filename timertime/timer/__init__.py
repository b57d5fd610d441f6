"""Timer package."""

from .lifecycle import (
    LifecycleState,
    Phase,
    SessionSelection,
    InvalidSelectionError,
    SnapshotError,
    ViewHostError,
    reduce,
)
from .selection import CATALOG, DurationChoice, present_choices, select
from .controller import LifecycleController, ViewHost, TickHandle, TICK_INTERVAL_MS

__all__ = [
    "LifecycleState",
    "Phase",
    "SessionSelection",
    "InvalidSelectionError",
    "SnapshotError",
    "ViewHostError",
    "reduce",
    "CATALOG",
    "DurationChoice",
    "present_choices",
    "select",
    "LifecycleController",
    "ViewHost",
    "TickHandle",
    "TICK_INTERVAL_MS",
]
