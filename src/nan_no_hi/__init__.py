"""In-memory calendar event dictionary.

Stores ``(date -> payload)`` associations and looks them up by year,
year+month, exact date, or all at once.
"""

from nan_no_hi.api import (
    append,
    clear,
    import_events,
    lookup,
    lookup_all,
    new,
)
from nan_no_hi.core.dates import CalendarDate, Event
from nan_no_hi.core.errors import (
    CalendarError,
    InvalidDateError,
    InvalidImportError,
    PreconditionViolation,
)
from nan_no_hi.server import CalendarServer
from nan_no_hi.store import EventStore

__all__ = [
    "CalendarDate",
    "CalendarError",
    "CalendarServer",
    "Event",
    "EventStore",
    "InvalidDateError",
    "InvalidImportError",
    "PreconditionViolation",
    "append",
    "clear",
    "import_events",
    "lookup",
    "lookup_all",
    "new",
]
