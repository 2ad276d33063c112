"""Custom exception hierarchy for the calendar store."""

from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base exception for all calendar store errors."""


# --- Configuration ---
class ConfigError(CalendarError):
    """Invalid or missing configuration."""


# --- Data ---
class InvalidDateError(CalendarError):
    """The given year/month/day does not denote a real Gregorian date."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class InvalidImportError(CalendarError):
    """One or more import items failed parsing or calendar validation.

    ``items`` holds every offending original value in input order.
    """

    def __init__(self, items: list[Any]):
        self.items = list(items)
        super().__init__(
            f"{len(self.items)} invalid import item(s): {self.items!r}"
        )


# --- Contract ---
class PreconditionViolation(CalendarError, ValueError):
    """Caller passed an argument outside its declared domain."""


# --- Server ---
class ServerError(CalendarError):
    """Calendar server infrastructure error."""


class ServerNotRunning(ServerError):
    """Operation submitted to a server that is not running."""
