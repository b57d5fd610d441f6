"""Duration catalog for Timer Time.

Each choice pairs the seconds shown on the countdown with the number of
extra hourglass loops that roughly fill the same time.  The loop counts
are tuned against the hourglass playback speed and are not derived from
the seconds.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Union

from .lifecycle import SessionSelection


class DurationChoice(NamedTuple):
    label: str
    repeat_count: int
    total_seconds: int


# ── catalog ───────────────────────────────────────────────────────────────

CATALOG: tuple[DurationChoice, ...] = (
    DurationChoice("10", 3, 10),
    DurationChoice("15", 5, 15),
    DurationChoice("30", 11, 30),
    DurationChoice("60", 21, 60),
)

_BY_LABEL: dict[str, DurationChoice] = {c.label: c for c in CATALOG}


def present_choices() -> Iterator[DurationChoice]:
    """Yield the catalog in display order."""
    yield from CATALOG


def choice_for_label(label: str) -> DurationChoice:
    """Look up a catalog entry by its label.  Raises ``KeyError``."""
    return _BY_LABEL[label]


def select(choice: Union[DurationChoice, str]) -> SessionSelection:
    """Turn a catalog entry (or its label) into a session selection."""
    if isinstance(choice, str):
        choice = choice_for_label(choice)
    return SessionSelection(choice.repeat_count, choice.total_seconds)
