"""Import processor: normalize raw input into validated events.

Two input shapes are accepted:

* **Structured** -- a sequence of ``(date_like, payload)`` pairs where
  ``date_like`` is a :class:`datetime.date` or a ``(year, month, day)``
  triple of ints.
* **Text** -- CSV with a header row (``date,event``) followed by
  ``<date-string>,<payload>`` rows.

Every item is checked before anything is returned; all failures are
collected so callers can see the complete set of rejected values at once.
"""

from __future__ import annotations

import csv
import io
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

from .core.dates import CalendarDate, Invalid, parse_date_string, validate
from .core.errors import PreconditionViolation

Outcome = tuple[Literal["ok", "error"], Any]
NormalizedEvent = tuple[CalendarDate, Any]

_field_limit_lock = threading.Lock()


@dataclass
class ImportBatch:
    """Transient result of processing one import payload.

    Exactly one of ``events`` / ``invalid_items`` is meaningful: when any
    item failed, ``invalid_items`` lists the original values in input order
    and ``events`` is empty.
    """

    events: list[NormalizedEvent] = field(default_factory=list)
    invalid_items: list[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.invalid_items

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> ImportBatch:
        events: list[NormalizedEvent] = []
        errors: list[Any] = []
        for tag, value in outcomes:
            if tag == "error":
                errors.append(value)
            else:
                events.append(value)
        if errors:
            return cls(invalid_items=errors)
        return cls(events=events)


# ---------------------------------------------------------------------------
# Structured input
# ---------------------------------------------------------------------------

def _is_pair(item: Any, size: int) -> bool:
    return isinstance(item, (tuple, list)) and len(item) == size


def _normalize_date(value: Any) -> CalendarDate | None:
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if _is_pair(value, 3) and validate(*value):
        return CalendarDate(*value)
    return None


def _structured_outcome(item: Any) -> Outcome:
    if not _is_pair(item, 2):
        return ("error", item)
    date_like, payload = item
    normalized = _normalize_date(date_like)
    if normalized is None:
        return ("error", date_like)
    return ("ok", (normalized, payload))


def import_structured(items: Iterable[Any]) -> ImportBatch:
    """Validate a sequence of ``(date_like, payload)`` pairs.

    A malformed item (not a 2-element pair) is reported as the whole item;
    a pair with a bad date is reported as its date component.
    """
    return ImportBatch.from_outcomes(_structured_outcome(item) for item in items)


# ---------------------------------------------------------------------------
# CSV text input
# ---------------------------------------------------------------------------

def _text_outcome(row: Sequence[str]) -> Outcome:
    if len(row) != 2:
        return ("error", list(row))
    date_text, payload = row
    parsed = parse_date_string(date_text)
    if isinstance(parsed, Invalid):
        return ("error", parsed.value)
    return ("ok", (parsed, payload))


def _allow_fields_up_to(size: int) -> None:
    # The reader limit is process-wide; it is only ever raised.
    with _field_limit_lock:
        if csv.field_size_limit() < size:
            csv.field_size_limit(size)


def import_text(text: str) -> ImportBatch:
    """Validate CSV text with a ``date,event`` header row.

    The first row is skipped by position whatever it contains.  Blank lines
    are ignored.  Rows that do not have exactly two columns are reported as
    the list of their fields.  Payloads may be as long as the text itself;
    a document the reader still cannot decode is reported as its offending
    raw line.
    """
    _allow_fields_up_to(len(text))
    reader = csv.reader(io.StringIO(text))
    rows: list[list[str]] = []
    try:
        for row in reader:
            if row:
                rows.append(row)
    except csv.Error:
        lines = text.splitlines()
        offending = lines[reader.line_num - 1] if 0 < reader.line_num <= len(lines) else text
        return ImportBatch(invalid_items=[offending])
    return ImportBatch.from_outcomes(_text_outcome(row) for row in rows[1:])


def process(raw: Any) -> ImportBatch:
    """Dispatch on the input shape: text goes to the CSV path."""
    if isinstance(raw, str):
        return import_text(raw)
    if isinstance(raw, (bytes, bytearray)) or not isinstance(raw, Iterable):
        raise PreconditionViolation(
            f"Import input must be CSV text or a sequence of pairs, "
            f"got {type(raw).__name__}"
        )
    return import_structured(raw)
