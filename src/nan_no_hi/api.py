"""Public operation set.

Thin functions over :class:`EventStore` mirroring the call shapes of the
calendar API::

    table = new()
    append(table, date(2025, 7, 15), "rainy day")
    append(table, 2025, 7, 16, "Wednesday")
    import_events(table, "date,event\\n2025/1/1,元日\\n")
    lookup(table, 2025)            # year
    lookup(table, 2025, 7)         # year + month
    lookup(table, 2025, 7, 16)     # exact day
    lookup(table, date(2025, 7, 16))
"""

from __future__ import annotations

from typing import Any

from .core.dates import Event
from .core.errors import PreconditionViolation
from .store import EventStore


def new(name: str | None = None) -> EventStore:
    """Create an empty store."""
    return EventStore(name=name)


def append(store: EventStore, *args: Any) -> None:
    """``append(store, date, payload)`` or ``append(store, y, m, d, payload)``.

    Raises:
        InvalidDateError: the date is not a real calendar date.
    """
    if len(args) == 2:
        store.append(*args)
    elif len(args) == 4:
        store.append_ymd(*args)
    else:
        raise PreconditionViolation(
            f"append takes (date, payload) or (year, month, day, payload), "
            f"got {len(args)} argument(s)"
        )


def import_events(store: EventStore, list_or_text: Any) -> int:
    """Import structured pairs or CSV text; see :meth:`EventStore.import_events`."""
    return store.import_events(list_or_text)


def lookup(store: EventStore, *args: Any) -> list[Event]:
    """``lookup(store, year[, month[, day]])`` or ``lookup(store, date)``."""
    if not 1 <= len(args) <= 3:
        raise PreconditionViolation(
            f"lookup takes 1 to 3 query arguments, got {len(args)}"
        )
    return store.lookup(*args)


def lookup_all(store: EventStore) -> list[Event]:
    return store.lookup_all()


def clear(store: EventStore) -> None:
    store.clear()
