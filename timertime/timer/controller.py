"""Lifecycle controller: drives a view host from the lifecycle reducer.

The controller owns the current :class:`LifecycleState` and the single
pending countdown tick.  Everything it shows goes through a
:class:`ViewHost`, so the whole flow can run against a fake host in
tests and against :class:`~timertime.ui.timer_view.TimerView` in the app.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import (
    Any, Callable, Iterable, Mapping, NoReturn, Optional, Protocol,
)

from .lifecycle import (
    AnimationFinished,
    Event,
    LifecycleState,
    Phase,
    RestartPressed,
    SessionSelection,
    SessionStarted,
    Tick,
    ViewHostError,
    reduce,
)
from .selection import CATALOG, DurationChoice


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


# ── view host contract ────────────────────────────────────────────────────


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class ViewHost(Protocol):
    def render_choices(
        self,
        catalog: Iterable[DurationChoice],
        on_choose: Callable[[int, int], None],
    ) -> None: ...

    def hide_choices(self) -> None: ...

    def show_animation(
        self,
        loop_count: int,
        on_playback_state_changed: Callable[[bool], None],
        *,
        autoplay: bool = True,
    ) -> None: ...

    def hide_animation(self) -> None: ...

    def render_countdown(self, seconds_remaining: int, visible: bool) -> None: ...

    def render_restart_button(
        self, visible: bool, on_restart: Callable[[], None],
    ) -> None: ...

    def schedule_tick(
        self, after_ms: int, callback: Callable[[], None],
    ) -> TickHandle: ...


# ── controller ────────────────────────────────────────────────────────────


class LifecycleController:
    """Runs one timer session at a time against a :class:`ViewHost`."""

    def __init__(self, host: ViewHost) -> None:
        self._host = host
        self._state = LifecycleState()
        self._tick_handle: Optional[TickHandle] = None
        self._listeners: list[Callable[[LifecycleState], None]] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def tick_pending(self) -> bool:
        return self._tick_handle is not None

    def add_listener(self, callback: Callable[[LifecycleState], None]) -> None:
        """Call ``callback(state)`` after every committed transition."""
        self._listeners.append(callback)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def present(self) -> None:
        """Show the duration menu."""
        self._host.render_choices(CATALOG, self._on_choose)

    def start(self, selection: SessionSelection) -> None:
        """Begin a session, superseding any session already running."""
        next_state = reduce(self._state, SessionStarted(selection))
        self._enter_session(next_state, selection)
        logger.info(
            "Session started: %d s, %d repeats",
            selection.total_seconds, selection.repeat_count,
        )
        if not next_state.countdown_running:
            logger.info("Countdown expired immediately (0 s)")

    def restart(self) -> None:
        """End the session and go back to the duration menu."""
        if not self._state.in_session:
            logger.debug("Restart ignored, no session")
            return
        self._cancel_tick()
        self._commit(reduce(self._state, RestartPressed()))
        logger.info("Session restarted")
        self._render_selecting()

    def observe_animation(self, is_playing: bool) -> None:
        """Feed a polled hourglass state for the current session."""
        self._on_playback_state_changed(self._state.generation, is_playing)

    # ══════════════════════════════════════════════════════════════════
    #  SAVE / RESTORE
    # ══════════════════════════════════════════════════════════════════

    def snapshot(self) -> dict[str, Any]:
        return self._state.to_snapshot()

    def restore(self, snapshot: Mapping[str, Any]) -> None:
        """Rebuild the visible phase from a flat record.

        Raises :class:`~timertime.timer.lifecycle.SnapshotError` for a bad
        record, leaving the controller untouched.
        """
        restored = LifecycleState.from_snapshot(
            snapshot, generation=self._state.generation + 1,
        )
        selection = restored.selection
        if selection is None:
            self._cancel_tick()
            self._commit(restored)
            self._render_selecting()
            return

        self._enter_session(
            restored, selection, autoplay=restored.animation_playing,
        )
        logger.info(
            "Session restored: phase %s, %d s left",
            self._state.phase.value, self._state.remaining_seconds,
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: entering and leaving a session
    # ══════════════════════════════════════════════════════════════════

    def _enter_session(
        self,
        next_state: LifecycleState,
        selection: SessionSelection,
        *,
        autoplay: bool = True,
    ) -> None:
        self._cancel_tick()
        # Committed before the host call: a host may report the hourglass
        # finished from inside show_animation.
        self._commit(next_state)
        try:
            self._host.hide_choices()
            self._host.show_animation(
                selection.repeat_count,
                partial(self._on_playback_state_changed, next_state.generation),
                autoplay=autoplay,
            )
        except Exception as exc:
            self._fail_to_menu(next_state.generation, exc)

        self._render_session()
        if self._state.countdown_running:
            self._schedule_tick()

    def _fail_to_menu(self, generation: int, exc: Exception) -> NoReturn:
        logger.error("Could not show the hourglass: %s", exc)
        self._cancel_tick()
        self._state = LifecycleState(generation=generation)
        self._render_selecting()
        self._notify()
        raise ViewHostError("hourglass animation unavailable") from exc

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: event handling
    # ══════════════════════════════════════════════════════════════════

    def _on_choose(self, repeat_count: int, total_seconds: int) -> None:
        self.start(SessionSelection(repeat_count, total_seconds))

    def _on_tick(self, generation: int) -> None:
        if generation == self._state.generation:
            self._tick_handle = None
        previous = self._state
        self._dispatch(Tick(generation))
        if self._state is previous:
            return

        self._host.render_countdown(
            self._state.remaining_seconds, self._state.countdown_visible,
        )
        if self._state.countdown_running:
            self._schedule_tick()
        else:
            logger.info("Countdown expired")

    def _on_playback_state_changed(self, generation: int, is_playing: bool) -> None:
        if is_playing:
            return
        previous = self._state
        self._dispatch(AnimationFinished(generation))
        if self._state is previous:
            return
        logger.info(
            "Hourglass finished with %d s on the clock",
            self._state.remaining_seconds,
        )
        self._host.render_restart_button(True, self.restart)

    def _dispatch(self, event: Event) -> None:
        next_state = reduce(self._state, event)
        if next_state is not self._state:
            self._commit(next_state)

    def _commit(self, state: LifecycleState) -> None:
        self._state = state
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: rendering & ticks
    # ══════════════════════════════════════════════════════════════════

    def _render_session(self) -> None:
        state = self._state
        self._host.render_countdown(state.remaining_seconds, state.countdown_visible)
        self._host.render_restart_button(state.restart_visible, self.restart)

    def _render_selecting(self) -> None:
        self._host.hide_animation()
        self._host.render_countdown(0, False)
        self._host.render_restart_button(False, self.restart)
        self.present()

    def _schedule_tick(self) -> None:
        self._tick_handle = self._host.schedule_tick(
            TICK_INTERVAL_MS, partial(self._on_tick, self._state.generation),
        )

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
