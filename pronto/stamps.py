"""Stamp construction and label vocabulary."""

import re
import uuid
from collections.abc import Sequence
from datetime import datetime, tzinfo

from pronto.models import StampEvent, StampKind

ENTRY_WORDS = frozenset({"entrada", "in", "entrance"})
EXIT_WORDS = frozenset({"saída", "saida", "out", "exit"})

_WORD = re.compile(r"\w+")


def classify_label(label: str) -> StampKind | None:
    """
    Classify a free-text stamp label such as 'Entrada 1' or 'Out 2'.

    Matching is case-insensitive and by whole word; entry words win when a
    label contains both. Returns None for labels that match neither.
    """
    words = {word.casefold() for word in _WORD.findall(label)}
    if words & ENTRY_WORDS:
        return StampKind.ENTRY
    if words & EXIT_WORDS:
        return StampKind.EXIT
    return None


def next_stamp_kind(events: Sequence[StampEvent]) -> StampKind:
    """Kind recorded by a quick stamp: entries and exits alternate by count."""
    return StampKind.ENTRY if len(events) % 2 == 0 else StampKind.EXIT


def default_label(kind: StampKind, count: int) -> str:
    """Label for the stamp recorded after ``count`` existing stamps."""
    base = "In" if kind == StampKind.ENTRY else "Out"
    return f"{base} {count // 2 + 1}"


def make_stamp(
    time: str,
    kind: StampKind,
    label: str | None = None,
    photo: str | None = None,
    *,
    count: int = 0,
) -> StampEvent:
    """
    Create a stamp with a fresh opaque id.

    Without a label, it is numbered as the stamp following ``count`` others.
    """
    return StampEvent(
        id=uuid.uuid4().hex,
        time=time,
        kind=kind,
        label=label if label is not None else default_label(kind, count),
        photo=photo,
    )


def stamp_from_label(time: str, label: str, photo: str | None = None) -> StampEvent | None:
    """Create a stamp from a legacy free-text label; None when the label is inert."""
    kind = classify_label(label)
    if kind is None:
        return None
    return make_stamp(time, kind, label=label, photo=photo)


def quick_stamp(events: Sequence[StampEvent], time: str) -> StampEvent:
    """Stamp the next action of the day at the given time."""
    kind = next_stamp_kind(events)
    return make_stamp(time, kind, count=len(events))


def current_time_of_day(tz: tzinfo | None = None) -> str:
    """Current wall-clock time as HH:MM."""
    return datetime.now(tz).strftime("%H:%M")
