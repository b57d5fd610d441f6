"""Timer/animation lifecycle as an immutable state value.

Phases
------
SELECTING            No session; the duration menu is showing.
RUNNING              Countdown ticking, hourglass still playing.
COUNTDOWN_EXPIRED    Countdown hit 0, hourglass still playing.
ANIMATION_COMPLETE   Hourglass finished first, countdown still ticking.
FINISHED             Both done; only the Restart button is left.

Transitions
-----------
Any → RUNNING | COUNTDOWN_EXPIRED       (SessionStarted; 0 s expires at once)
RUNNING → COUNTDOWN_EXPIRED             (Tick reaches 0)
ANIMATION_COMPLETE → FINISHED           (Tick reaches 0)
RUNNING → ANIMATION_COMPLETE            (AnimationFinished)
COUNTDOWN_EXPIRED → FINISHED            (AnimationFinished)
{in session} → SELECTING                (RestartPressed)

The countdown and the hourglass are two independent clocks.  Their
completions may arrive in either order, and the Restart button depends
only on the hourglass.

Every start and restart bumps ``generation``.  ``Tick`` and
``AnimationFinished`` carry the generation they were issued for, and
events from a superseded session are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Union


logger = logging.getLogger(__name__)


# ── errors ────────────────────────────────────────────────────────────────


class InvalidSelectionError(ValueError):
    """A session selection with missing or negative values."""


class SnapshotError(ValueError):
    """A saved state record that cannot be restored."""


class ViewHostError(RuntimeError):
    """The view host could not render what the controller asked for."""


# ── state ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    SELECTING = "selecting"
    RUNNING = "running"
    COUNTDOWN_EXPIRED = "countdown_expired"
    ANIMATION_COMPLETE = "animation_complete"
    FINISHED = "finished"


def _check_count(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSelectionError(
            f"{name} must be an integer, got {value!r}"
        )
    if value < 0:
        raise InvalidSelectionError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class SessionSelection:
    """The (repeat count, seconds) pair picked for one session."""

    repeat_count: int
    total_seconds: int

    def __post_init__(self) -> None:
        _check_count("repeat_count", self.repeat_count)
        _check_count("total_seconds", self.total_seconds)


@dataclass(frozen=True)
class LifecycleState:
    selection: SessionSelection | None = None
    remaining_seconds: int = 0
    animation_visible: bool = False
    countdown_visible: bool = False
    restart_visible: bool = False
    generation: int = 0

    @property
    def phase(self) -> Phase:
        if self.selection is None:
            return Phase.SELECTING
        if self.restart_visible:
            if self.countdown_visible:
                return Phase.ANIMATION_COMPLETE
            return Phase.FINISHED
        if self.countdown_visible:
            return Phase.RUNNING
        return Phase.COUNTDOWN_EXPIRED

    @property
    def in_session(self) -> bool:
        return self.selection is not None

    @property
    def countdown_running(self) -> bool:
        """True while ticks should keep arriving."""
        return self.countdown_visible and self.remaining_seconds > 0

    @property
    def animation_playing(self) -> bool:
        """Whether the hourglass is believed to still be playing."""
        return self.animation_visible and not self.restart_visible

    # ── flat record for save/restore ──────────────────────────────────

    def to_snapshot(self) -> dict[str, Any]:
        selection = self.selection or SessionSelection(0, 0)
        return {
            "repeat_count": selection.repeat_count,
            "total_seconds": selection.total_seconds,
            "remaining_seconds": self.remaining_seconds,
            "animation_visible": self.animation_visible,
            "countdown_visible": self.countdown_visible,
            "restart_visible": self.restart_visible,
        }

    @classmethod
    def from_snapshot(
        cls, data: Mapping[str, Any], *, generation: int = 0,
    ) -> "LifecycleState":
        """Rebuild a state from :meth:`to_snapshot` output.

        Raises :class:`SnapshotError` when the record is incomplete or
        describes a combination of flags no transition can produce.
        """
        missing = [k for k in SNAPSHOT_KEYS if k not in data]
        if missing:
            raise SnapshotError(f"snapshot is missing {', '.join(missing)}")

        for key in ("animation_visible", "countdown_visible", "restart_visible"):
            if not isinstance(data[key], bool):
                raise SnapshotError(f"{key} must be a bool, got {data[key]!r}")

        try:
            selection = SessionSelection(
                data["repeat_count"], data["total_seconds"],
            )
            _check_count("remaining_seconds", data["remaining_seconds"])
        except InvalidSelectionError as exc:
            raise SnapshotError(str(exc)) from exc

        remaining = data["remaining_seconds"]
        animation = data["animation_visible"]
        countdown = data["countdown_visible"]
        restart = data["restart_visible"]

        if not (animation or countdown or restart):
            return cls(generation=generation)

        if not animation:
            raise SnapshotError("countdown or restart shown without the hourglass")
        if remaining > selection.total_seconds:
            raise SnapshotError(
                f"remaining_seconds {remaining} exceeds "
                f"total_seconds {selection.total_seconds}"
            )
        if countdown and remaining == 0:
            raise SnapshotError("countdown visible at 0")
        if not countdown and remaining > 0:
            raise SnapshotError(
                f"countdown hidden with {remaining} s remaining"
            )

        return cls(
            selection=selection,
            remaining_seconds=remaining,
            animation_visible=True,
            countdown_visible=countdown,
            restart_visible=restart,
            generation=generation,
        )


SNAPSHOT_KEYS = (
    "repeat_count",
    "total_seconds",
    "remaining_seconds",
    "animation_visible",
    "countdown_visible",
    "restart_visible",
)


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionStarted:
    selection: SessionSelection


@dataclass(frozen=True)
class Tick:
    generation: int


@dataclass(frozen=True)
class AnimationFinished:
    generation: int


@dataclass(frozen=True)
class RestartPressed:
    pass


Event = Union[SessionStarted, Tick, AnimationFinished, RestartPressed]


# ── reducer ───────────────────────────────────────────────────────────────


def reduce(state: LifecycleState, event: Event) -> LifecycleState:
    """Apply one event and return the next state (``state`` is untouched)."""
    if isinstance(event, SessionStarted):
        return _start(state, event.selection)
    if isinstance(event, Tick):
        return _tick(state, event.generation)
    if isinstance(event, AnimationFinished):
        return _animation_finished(state, event.generation)
    if isinstance(event, RestartPressed):
        return _restart(state)
    raise TypeError(f"unknown lifecycle event: {event!r}")


def _start(state: LifecycleState, selection: SessionSelection) -> LifecycleState:
    if not isinstance(selection, SessionSelection):
        raise InvalidSelectionError(
            f"expected a SessionSelection, got {selection!r}"
        )
    return LifecycleState(
        selection=selection,
        remaining_seconds=selection.total_seconds,
        animation_visible=True,
        countdown_visible=selection.total_seconds > 0,
        restart_visible=False,
        generation=state.generation + 1,
    )


def _tick(state: LifecycleState, generation: int) -> LifecycleState:
    if generation != state.generation or not state.countdown_running:
        logger.debug(
            "Dropping tick (gen %d, current %d, phase %s)",
            generation, state.generation, state.phase.value,
        )
        return state
    remaining = state.remaining_seconds - 1
    return replace(
        state,
        remaining_seconds=remaining,
        countdown_visible=remaining > 0,
    )


def _animation_finished(state: LifecycleState, generation: int) -> LifecycleState:
    if (
        generation != state.generation
        or not state.in_session
        or state.restart_visible
    ):
        logger.debug(
            "Dropping animation-finished (gen %d, current %d, phase %s)",
            generation, state.generation, state.phase.value,
        )
        return state
    return replace(state, restart_visible=True)


def _restart(state: LifecycleState) -> LifecycleState:
    if not state.in_session:
        return state
    return LifecycleState(generation=state.generation + 1)
