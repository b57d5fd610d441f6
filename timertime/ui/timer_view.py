"""Main timer screen, the Qt side of the lifecycle controller.

Layout (top → bottom):
    - SelectionPanel (duration buttons, only between sessions)
    - Restart button (once the hourglass has finished)
    - Countdown text (while seconds remain)
    - HourglassView (for the whole session)

``TimerView`` implements the controller's ``ViewHost`` contract: it
never decides what to show, it only does what it is told.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton

from ..timer.selection import DurationChoice
from .hourglass import HourglassView
from .selection_panel import SelectionPanel


logger = logging.getLogger(__name__)


class QtTickHandle:
    """A one-shot QTimer that can be cancelled before it fires."""

    def __init__(
        self, parent: QWidget, after_ms: int, callback: Callable[[], None],
    ) -> None:
        self._callback: Optional[Callable[[], None]] = callback
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(after_ms)
        self._timer.timeout.connect(self._fire)
        self._timer.start()

    @property
    def active(self) -> bool:
        return self._callback is not None

    def cancel(self) -> None:
        if self._callback is None:
            return
        self._callback = None
        self._timer.stop()
        self._timer.deleteLater()

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        self._callback = None
        self._timer.deleteLater()
        callback()


class TimerView(QWidget):
    """Selection panel, countdown, hourglass and restart button."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._on_choose: Optional[Callable[[int, int], None]] = None
        self._on_restart: Optional[Callable[[], None]] = None
        self._playback_callback: Optional[Callable[[bool], None]] = None
        self._build_ui()
        self._connect_signals()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._selection_panel = SelectionPanel(self)
        self._selection_panel.setVisible(False)
        layout.addWidget(self._selection_panel)

        self._restart_btn = QPushButton("Restart", self)
        self._restart_btn.setObjectName("restartButton")
        self._restart_btn.setVisible(False)
        layout.addWidget(self._restart_btn)

        self._countdown_label = QLabel("0", self)
        self._countdown_label.setObjectName("countdownLabel")
        self._countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._countdown_label.setVisible(False)
        layout.addWidget(self._countdown_label)

        self._hourglass = HourglassView(self)
        self._hourglass.setVisible(False)
        layout.addWidget(self._hourglass, 1)

    def _connect_signals(self) -> None:
        self._selection_panel.choice_selected.connect(self._on_choice_selected)
        self._restart_btn.clicked.connect(self._on_restart_clicked)
        self._hourglass.playback_state_changed.connect(self._on_playback_changed)

    # ── child access ──────────────────────────────────────────────────────

    @property
    def selection_panel(self) -> SelectionPanel:
        return self._selection_panel

    @property
    def hourglass(self) -> HourglassView:
        return self._hourglass

    @property
    def countdown_label(self) -> QLabel:
        return self._countdown_label

    @property
    def restart_button(self) -> QPushButton:
        return self._restart_btn

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._hourglass.apply_palette(palette)

    # ══════════════════════════════════════════════════════════════════
    #  VIEW HOST
    # ══════════════════════════════════════════════════════════════════

    def render_choices(
        self,
        catalog: Iterable[DurationChoice],
        on_choose: Callable[[int, int], None],
    ) -> None:
        self._on_choose = on_choose
        self._selection_panel.set_choices(catalog)
        self._selection_panel.setVisible(True)

    def hide_choices(self) -> None:
        self._selection_panel.setVisible(False)

    def show_animation(
        self,
        loop_count: int,
        on_playback_state_changed: Callable[[bool], None],
        *,
        autoplay: bool = True,
    ) -> None:
        # Detach first so stopping a previous run is not reported
        self._playback_callback = None
        self._hourglass.stop()
        self._hourglass.setVisible(True)
        self._playback_callback = on_playback_state_changed
        if autoplay:
            self._hourglass.play(loop_count)
        else:
            self._hourglass.show_at_rest()

    def hide_animation(self) -> None:
        self._playback_callback = None
        self._hourglass.stop()
        self._hourglass.setVisible(False)

    def render_countdown(self, seconds_remaining: int, visible: bool) -> None:
        self._countdown_label.setText(str(seconds_remaining))
        self._countdown_label.setVisible(visible)

    def render_restart_button(
        self, visible: bool, on_restart: Callable[[], None],
    ) -> None:
        self._on_restart = on_restart
        self._restart_btn.setVisible(visible)

    def schedule_tick(
        self, after_ms: int, callback: Callable[[], None],
    ) -> QtTickHandle:
        return QtTickHandle(self, after_ms, callback)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_choice_selected(self, choice: DurationChoice) -> None:
        if self._on_choose is None:
            logger.debug("Choice %s clicked with no handler", choice.label)
            return
        self._on_choose(choice.repeat_count, choice.total_seconds)

    def _on_restart_clicked(self) -> None:
        if self._on_restart is not None:
            self._on_restart()

    def _on_playback_changed(self, is_playing: bool) -> None:
        if self._playback_callback is not None:
            self._playback_callback(is_playing)
