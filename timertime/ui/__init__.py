"""UI package."""

from .timer_view import TimerView, QtTickHandle
from .hourglass import HourglassView
from .selection_panel import SelectionPanel

__all__ = [
    "TimerView",
    "QtTickHandle",
    "HourglassView",
    "SelectionPanel",
]
