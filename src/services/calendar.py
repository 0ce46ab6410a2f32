"""
Month grid layout and per-day event grouping.

Months are 1-based (January = 1). Weeks start on Monday.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import TypedDict

from models.events import CalendarEvent

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class MonthLayout(TypedDict):
    days_in_month: int
    leading_blanks: int


class DayCell(TypedDict):
    day: int
    date: str
    is_today: bool
    events: list[CalendarEvent]


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Roll an out-of-range month (e.g. 0 or 13) into the adjacent year."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return year, month


def prev_month(year: int, month: int) -> tuple[int, int]:
    return normalize_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    return normalize_month(year, month + 1)


def date_key(year: int, month: int, day: int) -> str:
    """Canonical YYYY-MM-DD key used to match events to days."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def days_in_month(year: int, month: int) -> int:
    """Day zero of the next month is the last day of this one."""
    next_year, following = next_month(year, month)
    return (date(next_year, following, 1) - timedelta(days=1)).day


def leading_blanks(year: int, month: int) -> int:
    """Blank cells before day 1 in a Monday-first week."""
    sunday_based = date(year, month, 1).isoweekday() % 7  # 0=Sunday..6=Saturday
    return (sunday_based + 6) % 7


def month_layout(year: int, month: int) -> MonthLayout:
    return {
        "days_in_month": days_in_month(year, month),
        "leading_blanks": leading_blanks(year, month),
    }


def group_by_date(
    events: list[CalendarEvent], year: int, month: int
) -> dict[int, list[CalendarEvent]]:
    """
    Group a month's events by day of month.

    Matching is exact string equality on the YYYY-MM-DD key, so events
    of other months (or with malformed dates) never appear.
    """
    keys = {date_key(year, month, day): day for day in range(1, days_in_month(year, month) + 1)}
    grouped: dict[int, list[CalendarEvent]] = defaultdict(list)
    for event in events:
        day = keys.get(event.get("date"))
        if day is not None:
            grouped[day].append(event)
    return dict(grouped)


def is_today(year: int, month: int, day: int, today: date | None = None) -> bool:
    today = today or date.today()
    return (today.year, today.month, today.day) == (year, month, day)


def month_grid(
    year: int,
    month: int,
    events: list[CalendarEvent],
    today: date | None = None,
) -> list[list[DayCell | None]]:
    """
    Build the month as rows of seven cells, Monday first.

    Blank cells (before day 1 and after the last day) are None. Each day's
    events are ordered by time, then title.
    """
    today = today or date.today()
    layout = month_layout(year, month)
    grouped = group_by_date(events, year, month)

    cells: list[DayCell | None] = [None] * layout["leading_blanks"]
    for day in range(1, layout["days_in_month"] + 1):
        day_events = sorted(grouped.get(day, []), key=lambda e: (e["time"], e["title"]))
        cells.append(
            {
                "day": day,
                "date": date_key(year, month, day),
                "is_today": is_today(year, month, day, today),
                "events": day_events,
            }
        )

    # Pad the last week
    cells.extend([None] * (-len(cells) % 7))
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
