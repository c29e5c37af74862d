"""Tests for the half-open time interval model."""

from datetime import time

import pytest

from camp.services.intervals import TimeInterval, overlaps


def _t(hhmm: str) -> time:
    return time.fromisoformat(hhmm)


def test_other_starts_inside():
    """a_start <= b_start < a_end."""
    assert overlaps(_t("09:00"), _t("10:30"), _t("10:00"), _t("11:00"))
    assert overlaps(_t("09:00"), _t("10:00"), _t("09:00"), _t("09:30"))


def test_other_ends_inside():
    """a_start < b_end <= a_end."""
    assert overlaps(_t("10:00"), _t("11:00"), _t("09:00"), _t("10:30"))
    assert overlaps(_t("10:00"), _t("11:00"), _t("10:30"), _t("11:00"))


def test_other_contains():
    """b_start <= a_start and a_end <= b_end."""
    assert overlaps(_t("10:00"), _t("11:00"), _t("09:00"), _t("12:00"))
    assert overlaps(_t("09:00"), _t("12:00"), _t("10:00"), _t("11:00"))


def test_adjacent_intervals_do_not_overlap():
    assert not overlaps(_t("09:00"), _t("10:00"), _t("10:00"), _t("11:00"))
    assert not overlaps(_t("10:00"), _t("11:00"), _t("09:00"), _t("10:00"))


def test_disjoint_intervals_do_not_overlap():
    assert not overlaps(_t("08:00"), _t("09:00"), _t("10:00"), _t("11:00"))


@pytest.mark.parametrize(
    "a,b",
    [
        (("09:00", "10:30"), ("10:00", "11:00")),
        (("09:00", "12:00"), ("10:00", "11:00")),
        (("09:00", "10:00"), ("10:00", "11:00")),
        (("13:00", "14:00"), ("09:00", "10:00")),
    ],
)
def test_symmetric(a, b):
    a_start, a_end = map(_t, a)
    b_start, b_end = map(_t, b)
    assert overlaps(a_start, a_end, b_start, b_end) == overlaps(b_start, b_end, a_start, a_end)


def test_interval_overlaps_itself():
    interval = TimeInterval(_t("10:00"), _t("11:00"))
    assert interval.overlaps(interval)
    assert interval.is_valid


def test_inverted_interval_is_not_rejected():
    inverted = TimeInterval(_t("11:00"), _t("10:00"))
    assert not inverted.is_valid
    # the formula still answers; no exception
    assert inverted.overlaps(TimeInterval(_t("10:30"), _t("10:45"))) is False
