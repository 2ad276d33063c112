"""Calendar date validation and parsing.

Single source of truth for "is this a real calendar date" and "can this
string be read as one".  All dates are proleptic Gregorian.

Accepted string forms
---------------------
``YYYY-MM-DD``, ``YYYY/MM/DD``, ``YYYYMMDD`` and the one-digit month/day
variants ``YYYY-M-D`` / ``YYYY/M/D``.  Both separators must be the same.
Without separators only the exact eight-digit form is accepted, so a bare
``"2025"`` is rejected instead of being split into ``20-2-5``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import MAXYEAR, date
from typing import Any, NamedTuple

from .errors import InvalidDateError

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_SEPARATED_RE = re.compile(
    r"(?P<year>[0-9]{1,4})(?P<sep>[-/])(?P<month>[0-9]{1,2})"
    r"(?P=sep)(?P<day>[0-9]{1,2})"
)
_COMPACT_RE = re.compile(r"(?P<year>[0-9]{4})(?P<month>[0-9]{2})(?P<day>[0-9]{2})")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def validate(year: Any, month: Any, day: Any) -> bool:
    """Return True iff (year, month, day) denotes a real calendar date.

    Components must be plain ints.  The year is capped at ``datetime.MAXYEAR``
    because stored dates are handed back as :class:`datetime.date`.
    """
    if not (_is_int(year) and _is_int(month) and _is_int(day)):
        return False
    if not 0 < year <= MAXYEAR:
        return False
    if not 1 <= month <= 12:
        return False
    return 1 <= day <= days_in_month(year, month)


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A validated (year, month, day) triple, ordered lexicographically."""

    year: int
    month: int
    day: int

    @classmethod
    def from_ymd(cls, year: Any, month: Any, day: Any) -> CalendarDate:
        if not validate(year, month, day):
            raise InvalidDateError((year, month, day))
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> CalendarDate:
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


class Event(NamedTuple):
    """A stored (date, payload) association as returned by lookups."""

    date: date
    payload: Any


@dataclass(frozen=True)
class Invalid:
    """A string that could not be read as a calendar date, kept verbatim."""

    value: Any


def parse_date_string(text: Any) -> CalendarDate | Invalid:
    """Parse a loosely formatted date string.

    Returns a :class:`CalendarDate` on success, otherwise :class:`Invalid`
    carrying the original input unchanged.
    """
    if not isinstance(text, str):
        return Invalid(text)

    match = _SEPARATED_RE.fullmatch(text) or _COMPACT_RE.fullmatch(text)
    if match is None:
        return Invalid(text)

    year = int(match["year"])
    month = int(match["month"])
    day = int(match["day"])
    if not validate(year, month, day):
        return Invalid(text)
    return CalendarDate(year, month, day)
