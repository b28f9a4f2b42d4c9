"""Tests for stamp helpers and label vocabulary."""

import dataclasses
import re

import pytest

from pronto.models import StampKind
from pronto.stamps import (
    classify_label,
    current_time_of_day,
    make_stamp,
    next_stamp_kind,
    quick_stamp,
    stamp_from_label,
)


@pytest.mark.parametrize(
    ("label", "kind"),
    [
        ("Entrada 1", StampKind.ENTRY),
        ("In 2", StampKind.ENTRY),
        ("entrance", StampKind.ENTRY),
        ("ENTRANCE", StampKind.ENTRY),
        ("Saída 1", StampKind.EXIT),
        ("SAÍDA", StampKind.EXIT),
        ("saida", StampKind.EXIT),
        ("Out 3", StampKind.EXIT),
        ("exit", StampKind.EXIT),
        ("lunch", None),
        ("", None),
        ("Finish", None),
    ],
)
def test_classify_label(label, kind):
    """Labels map to entry, exit, or nothing."""
    assert classify_label(label) is kind


def test_make_stamp_ids_are_unique():
    """Each stamp gets its own opaque id."""
    first = make_stamp("08:00", StampKind.ENTRY)
    second = make_stamp("08:00", StampKind.ENTRY)
    assert first.id != second.id
    assert first.label == "In 1"


def test_make_stamp_numbers_by_count():
    """The default label follows the stamps already recorded."""
    assert make_stamp("13:00", StampKind.ENTRY, count=2).label == "In 2"
    assert make_stamp("17:00", StampKind.EXIT, count=3).label == "Out 2"
    assert make_stamp("17:00", StampKind.EXIT, "Saída", count=3).label == "Saída"


def test_stamps_are_immutable():
    """Edits produce a new stamp."""
    stamp = make_stamp("08:00", StampKind.ENTRY)
    with pytest.raises(dataclasses.FrozenInstanceError):
        stamp.time = "09:00"
    edited = dataclasses.replace(stamp, time="09:00")
    assert edited.id == stamp.id
    assert edited.minute == 540
    assert stamp.minute == 480


def test_stamp_from_label():
    """Legacy labels become typed stamps; inert labels are dropped."""
    stamp = stamp_from_label("12:00", "Saída 1", photo="data:image/jpeg;base64,xx")
    assert stamp is not None
    assert stamp.kind == StampKind.EXIT
    assert stamp.label == "Saída 1"
    assert stamp.photo == "data:image/jpeg;base64,xx"
    assert stamp_from_label("12:00", "coffee") is None


def test_quick_stamp_alternates():
    """Quick stamps alternate entry and exit with numbered labels."""
    stamps = []
    for time in ("08:00", "12:00", "13:00"):
        stamps.append(quick_stamp(stamps, time))

    assert [s.kind for s in stamps] == [StampKind.ENTRY, StampKind.EXIT, StampKind.ENTRY]
    assert [s.label for s in stamps] == ["In 1", "Out 1", "In 2"]
    assert next_stamp_kind(stamps) == StampKind.EXIT


def test_current_time_of_day():
    """Current time is HH:MM."""
    assert re.fullmatch(r"\d{2}:\d{2}", current_time_of_day())
