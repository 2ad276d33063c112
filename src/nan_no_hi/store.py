"""Event store -- a thread-safe bag of events keyed by calendar date.

Multiple events may share a date and identical ``(date, payload)`` pairs
are kept as separate entries.  Lookups are range scans over a prefix of
``(year, month, day)`` and always come back sorted by date; events on the
same date keep their insertion order.

All reads and writes hold one ``threading.RLock``.  Lookups build fresh
lists under the lock, so callers never see a half-applied import.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from datetime import date
from typing import Any

from . import importer
from .core.dates import CalendarDate, Event
from .core.errors import InvalidImportError, PreconditionViolation

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_query(year: Any, month: Any = None, day: Any = None) -> None:
    """Enforce lookup preconditions.

    ``year`` must be a positive int, ``month`` an int in 1..12 and ``day`` an
    int in 1..31.  The combination need not be a real date.
    """
    if not _is_int(year) or year <= 0:
        raise PreconditionViolation(f"year must be a positive int, got {year!r}")
    if month is None:
        if day is not None:
            raise PreconditionViolation("day given without month")
        return
    if not _is_int(month) or not 1 <= month <= 12:
        raise PreconditionViolation(f"month must be an int in 1..12, got {month!r}")
    if day is not None and (not _is_int(day) or not 1 <= day <= 31):
        raise PreconditionViolation(f"day must be an int in 1..31, got {day!r}")


class EventStore:
    """Concurrency-safe multi-map from :class:`CalendarDate` to payloads.

    Parameters
    ----------
    name:
        Optional label to tell stores apart when several coexist.  It has
        no effect on behaviour.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._lock = threading.RLock()
        self._events: dict[CalendarDate, list[Any]] = defaultdict(list)
        self._count = 0
        logger.debug("EventStore created (name=%s)", name)

    def __repr__(self) -> str:
        return f"EventStore(name={self.name!r}, events={len(self)})"

    def __len__(self) -> int:
        with self._lock:
            return self._count

    def __bool__(self) -> bool:
        return len(self) > 0

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, when: date | tuple[int, int, int], payload: Any) -> None:
        """Append one event for a :class:`datetime.date` or a ymd triple.

        Raises:
            InvalidDateError: the triple is not a real calendar date.
            PreconditionViolation: ``when`` is neither a date nor a triple.
        """
        if isinstance(when, date):
            self._insert([(CalendarDate.from_date(when), payload)])
            return
        if isinstance(when, tuple) and len(when) == 3:
            self.append_ymd(*when, payload)
            return
        raise PreconditionViolation(
            f"expected a date or (year, month, day) tuple, got {when!r}"
        )

    def append_ymd(self, year: int, month: int, day: int, payload: Any) -> None:
        """Append one event; the triple is validated before any mutation.

        Raises:
            InvalidDateError: the triple is not a real calendar date.
        """
        key = CalendarDate.from_ymd(year, month, day)
        self._insert([(key, payload)])

    def import_events(self, raw: Any) -> int:
        """Import a structured list or CSV text, all or nothing.

        The whole input is validated before the store is touched.  Returns
        the number of events inserted.

        Raises:
            InvalidImportError: with every rejected original value.
        """
        batch = importer.process(raw)
        if not batch.ok:
            raise InvalidImportError(batch.invalid_items)
        self._insert(batch.events)
        logger.info(
            "Imported %d event(s) into store %s", len(batch.events), self.name,
        )
        return len(batch.events)

    def clear(self) -> None:
        """Remove every event.  The store stays usable."""
        with self._lock:
            self._events.clear()
            self._count = 0
        logger.debug("EventStore cleared (name=%s)", self.name)

    def _insert(self, events: list[tuple[CalendarDate, Any]]) -> None:
        with self._lock:
            for key, payload in events:
                self._events[key].append(payload)
            self._count += len(events)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def lookup(
        self,
        year: int | date,
        month: int | None = None,
        day: int | None = None,
    ) -> list[Event]:
        """Events matching a year, year+month, exact day, or a date.

        Unspecified fields act as wildcards.  Results are sorted by date.

        Raises:
            PreconditionViolation: arguments outside their domain.
        """
        if isinstance(year, date):
            if month is not None or day is not None:
                raise PreconditionViolation(
                    "month/day cannot be combined with a date argument"
                )
            year, month, day = year.year, year.month, year.day
        check_query(year, month, day)
        return self._select(year, month, day)

    def lookup_all(self) -> list[Event]:
        """Every stored event, sorted by date."""
        return self._select(None, None, None)

    def _select(
        self, year: int | None, month: int | None, day: int | None,
    ) -> list[Event]:
        def matches(key: CalendarDate) -> bool:
            return (
                (year is None or key.year == year)
                and (month is None or key.month == month)
                and (day is None or key.day == day)
            )

        with self._lock:
            selected = [
                (key, list(payloads))
                for key, payloads in self._events.items()
                if payloads and matches(key)
            ]

        result: list[Event] = []
        for key, payloads in sorted(selected, key=lambda item: item[0]):
            reified = key.to_date()
            result.extend(Event(reified, payload) for payload in payloads)
        return result
