"""Shared fixtures for the nan_no_hi test suite."""

from __future__ import annotations

from datetime import date

import pytest

from nan_no_hi.store import EventStore


# ---------------------------------------------------------------------------
# Holiday data
# ---------------------------------------------------------------------------

JAPANESE_HOLIDAYS: list[tuple[date, str]] = [
    (date(2024, 1, 1), "元日"),
    (date(2024, 1, 8), "成人の日"),
    (date(2024, 2, 11), "建国記念の日"),
    (date(2024, 2, 12), "休日"),
    (date(2024, 2, 23), "天皇誕生日"),
    (date(2024, 3, 20), "春分の日"),
    (date(2024, 4, 29), "昭和の日"),
    (date(2024, 5, 3), "憲法記念日"),
    (date(2024, 5, 4), "みどりの日"),
    (date(2024, 5, 5), "こどもの日"),
    (date(2024, 5, 6), "休日"),
    (date(2024, 7, 15), "海の日"),
    (date(2024, 8, 11), "山の日"),
    (date(2024, 8, 12), "休日"),
    (date(2024, 9, 16), "敬老の日"),
    (date(2024, 9, 22), "秋分の日"),
    (date(2024, 9, 23), "休日"),
    (date(2024, 10, 14), "スポーツの日"),
    (date(2024, 11, 3), "文化の日"),
    (date(2024, 11, 4), "休日"),
    (date(2024, 11, 23), "勤労感謝の日"),
    (date(2025, 1, 1), "元日"),
    (date(2025, 1, 13), "成人の日"),
    (date(2025, 2, 11), "建国記念の日"),
    (date(2025, 2, 23), "天皇誕生日"),
    (date(2025, 2, 24), "休日"),
    (date(2025, 3, 20), "春分の日"),
    (date(2025, 4, 29), "昭和の日"),
    (date(2025, 5, 3), "憲法記念日"),
    (date(2025, 5, 4), "みどりの日"),
    (date(2025, 5, 5), "こどもの日"),
    (date(2025, 5, 6), "休日"),
    (date(2025, 7, 21), "海の日"),
    (date(2025, 8, 11), "山の日"),
    (date(2025, 9, 15), "敬老の日"),
    (date(2025, 9, 23), "秋分の日"),
    (date(2025, 10, 13), "スポーツの日"),
    (date(2025, 11, 3), "文化の日"),
    (date(2025, 11, 23), "勤労感謝の日"),
    (date(2025, 11, 24), "休日"),
]


@pytest.fixture
def store() -> EventStore:
    """Return a fresh, empty store."""
    return EventStore(name="test")


@pytest.fixture
def holiday_store(store: EventStore) -> EventStore:
    """Return a store holding the 2024-2025 Japanese national holidays.

    Appended in reverse so lookups cannot rely on insertion order.
    """
    for when, name in reversed(JAPANESE_HOLIDAYS):
        store.append(when, name)
    return store


@pytest.fixture
def holiday_csv() -> str:
    """Return the holiday list in the Cabinet Office CSV layout."""
    lines = ["国民の祝日・休日月日,国民の祝日・休日名称"]
    lines += [f"{d.year}/{d.month}/{d.day},{name}" for d, name in JAPANESE_HOLIDAYS]
    return "\r\n".join(lines) + "\r\n"
