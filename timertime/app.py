"""Main application window for Timer Time."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QStatusBar

from .timer.controller import LifecycleController
from .timer.lifecycle import LifecycleState, Phase, SnapshotError
from .timer.selection import CATALOG, select
from .ui.timer_view import TimerView
from .ui.styles import build_stylesheet, get_palette
from .database.snapshots import save_snapshot, load_snapshot, clear_snapshot
from .settings import Settings, load_settings, save_settings


logger = logging.getLogger(__name__)

PHASE_MESSAGES: dict[Phase, str] = {
    Phase.SELECTING:          "Pick a duration",
    Phase.RUNNING:            "Sand is falling...",
    Phase.COUNTDOWN_EXPIRED:  "Time's up, the last grains are settling",
    Phase.ANIMATION_COMPLETE: "Hourglass empty, countdown still running",
    Phase.FINISHED:           "Done!",
}

_DIGIT_KEYS = (Qt.Key.Key_1, Qt.Key.Key_2, Qt.Key.Key_3, Qt.Key.Key_4)


class TimerTimeApp(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Timer Time")
        self.setMinimumSize(320, 520)

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── central view + controller ─────────────────────────────────
        self._timer_view = TimerView(self)
        try:
            self._timer_view.hourglass.set_speed(self._settings.animation_speed)
        except ValueError as exc:
            logger.warning("Keeping default hourglass speed: %s", exc)
        self.setCentralWidget(self._timer_view)

        self._controller = LifecycleController(self._timer_view)
        self._controller.add_listener(self._on_state_changed)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        self._build_menu_bar()
        self._apply_theme(self._settings.dark_mode)
        self._restore_geometry()

        self._restore_session()
        self._on_state_changed(self._controller.state)

    # ── accessors ─────────────────────────────────────────────────────────

    @property
    def controller(self) -> LifecycleController:
        return self._controller

    @property
    def timer_view(self) -> TimerView:
        return self._timer_view

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        about_action = QAction("About Timer Time", self)
        about_action.setMenuRole(QAction.MenuRole.AboutRole)
        about_action.triggered.connect(self._show_about)

        quit_action = QAction("Quit Timer Time", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)

        app_menu = menu_bar.addMenu("Timer Time")
        app_menu.addAction(about_action)
        app_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("View")
        self._dark_action = QAction("Dark Mode", self)
        self._dark_action.setCheckable(True)
        self._dark_action.setChecked(self._settings.dark_mode)
        self._dark_action.setShortcut(QKeySequence("Ctrl+D"))
        self._dark_action.triggered.connect(self._toggle_dark_mode)
        view_menu.addAction(self._dark_action)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About Timer Time",
            "<h3>Timer Time</h3>"
            "<p>Pick a duration and watch the hourglass run.</p>",
        )

    # ══════════════════════════════════════════════════════════════════
    #  THEME
    # ══════════════════════════════════════════════════════════════════

    def _toggle_dark_mode(self) -> None:
        self._settings.dark_mode = not self._settings.dark_mode
        save_settings(self._settings)
        self._dark_action.setChecked(self._settings.dark_mode)
        self._apply_theme(self._settings.dark_mode)

    def _apply_theme(self, dark_mode: bool) -> None:
        palette = get_palette(dark_mode)
        self.setStyleSheet(build_stylesheet(palette))
        self._timer_view.apply_palette(palette)

    # ══════════════════════════════════════════════════════════════════
    #  SESSION STATE
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: LifecycleState) -> None:
        self._status_bar.showMessage(PHASE_MESSAGES[state.phase])

    def _restore_session(self) -> None:
        """Pick up the session saved on last close, or show the menu."""
        snapshot = load_snapshot() if self._settings.restore_session else None
        if snapshot is None:
            self._controller.present()
            return
        try:
            self._controller.restore(snapshot)
        except SnapshotError as exc:
            logger.warning("Discarding saved session: %s", exc)
            clear_snapshot()
            self._controller.present()

    def _save_session(self) -> None:
        if self._settings.restore_session and self._controller.state.in_session:
            save_snapshot(self._controller.snapshot())
        else:
            clear_snapshot()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Restart the 500 ms save timer on each move or resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_digit(self, index: int) -> None:
        """Pick the ``index``-th duration while the menu is showing."""
        if self._controller.phase != Phase.SELECTING:
            return
        self._controller.start(select(CATALOG[index]))

    def _on_escape(self) -> None:
        """Press Restart, but only once it is on screen."""
        if self._controller.state.restart_visible:
            self._controller.restart()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._save_session()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        key = event.key()
        if key in _DIGIT_KEYS and not event.modifiers():
            self._on_digit(_DIGIT_KEYS.index(key))
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
