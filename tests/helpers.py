"""Shared test helpers for Timer Time."""

from __future__ import annotations

from typing import Callable


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeTickHandle:
    def __init__(self, due_ms: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeViewHost:
    """Records what the controller asks for; time only moves on ``advance``."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.handles: list[FakeTickHandle] = []
        self.calls: list[str] = []

        self.choices_visible = False
        self.catalog: list = []
        self.on_choose: Callable[[int, int], None] | None = None

        self.animation_visible = False
        self.animation_playing = False
        self.loop_count: int | None = None
        self.on_playback: Callable[[bool], None] | None = None
        self.fail_animation = False
        self.finish_on_show = False

        self.countdown_text: int | None = None
        self.countdown_visible = False

        self.restart_visible = False
        self.on_restart: Callable[[], None] | None = None

    # ── view host ────────────────────────────────────────────────────

    def render_choices(self, catalog, on_choose) -> None:
        self.calls.append("render_choices")
        self.catalog = list(catalog)
        self.on_choose = on_choose
        self.choices_visible = True

    def hide_choices(self) -> None:
        self.calls.append("hide_choices")
        self.choices_visible = False

    def show_animation(self, loop_count, on_playback_state_changed, *, autoplay=True) -> None:
        self.calls.append("show_animation")
        if self.fail_animation:
            raise FileNotFoundError("hourglass resource missing")
        self.animation_visible = True
        self.animation_playing = autoplay
        self.loop_count = loop_count
        self.on_playback = on_playback_state_changed
        if autoplay and self.finish_on_show:
            # Whole playback runs inside the call, like a zero-length loop
            on_playback_state_changed(True)
            self.animation_playing = False
            on_playback_state_changed(False)

    def hide_animation(self) -> None:
        self.calls.append("hide_animation")
        self.animation_visible = False
        self.animation_playing = False

    def render_countdown(self, seconds_remaining, visible) -> None:
        self.countdown_text = seconds_remaining
        self.countdown_visible = visible

    def render_restart_button(self, visible, on_restart) -> None:
        self.restart_visible = visible
        self.on_restart = on_restart

    def schedule_tick(self, after_ms, callback) -> FakeTickHandle:
        handle = FakeTickHandle(self.now_ms + after_ms, callback)
        self.handles.append(handle)
        return handle

    # ── test controls ────────────────────────────────────────────────

    @property
    def pending(self) -> list[FakeTickHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due ticks in time order."""
        target = self.now_ms + ms
        while True:
            due = [h for h in self.pending if h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due_ms)
            self.now_ms = handle.due_ms
            handle.fired = True
            handle.callback()
        self.now_ms = target

    def advance_seconds(self, seconds: int) -> None:
        self.advance(seconds * 1000)

    def finish_animation(self) -> None:
        """Report the hourglass as done, the way the real widget does."""
        self.animation_playing = False
        if self.on_playback is not None:
            self.on_playback(False)

    def choose(self, label: str) -> None:
        """Click the duration button with ``label``."""
        choice = next(c for c in self.catalog if c.label == label)
        assert self.on_choose is not None
        self.on_choose(choice.repeat_count, choice.total_seconds)

    def press_restart(self) -> None:
        assert self.restart_visible, "restart button is not on screen"
        assert self.on_restart is not None
        self.on_restart()
