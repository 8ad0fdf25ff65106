"""
Month calendar grid.

The grid always covers whole weeks, Sunday through Saturday: it starts on the
Sunday on or before the 1st and ends on the Saturday on or after the last day
of the month. Start and end are computed directly by the standard library
calendar, so there is no open-ended date walk.
"""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from models.records import Slot

WEEKDAY_LABELS = ('日', '月', '火', '水', '木', '金', '土')

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass(frozen=True)
class DayCell:
    date: date
    in_month: bool
    is_today: bool
    slots: Tuple[Slot, ...]

    @property
    def date_str(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    weeks: Tuple[Tuple[DayCell, ...], ...]

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)

    @property
    def start(self) -> date:
        return self.weeks[0][0].date

    @property
    def end(self) -> date:
        return self.weeks[-1][-1].date

    def cells(self) -> Iterator[DayCell]:
        for week in self.weeks:
            yield from week


def month_label(year: int, month: int) -> str:
    return f'{year}年 {month}月'


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _sort_by_start(slots: Iterable[Slot]) -> Tuple[Slot, ...]:
    # HH:MM is zero-padded, so string order is time order.
    return tuple(sorted(slots, key=lambda s: s.start))


def bucket_by_date(slots: Iterable[Slot]) -> Dict[str, Tuple[Slot, ...]]:
    """Group active slots by day, each day sorted by start time."""
    buckets = defaultdict(list)
    for slot in slots or ():
        if slot.is_active:
            buckets[slot.date].append(slot)
    return {day: _sort_by_start(day_slots) for day, day_slots in buckets.items()}


def slots_on_date(slots: Iterable[Slot], date_str: str) -> List[Slot]:
    """Active slots of one day, sorted by start time."""
    return list(_sort_by_start(s for s in slots or () if s.is_active and s.date == date_str))


def build_month(
    year: int,
    month: int,
    slots: Iterable[Slot],
    today: Optional[date] = None
) -> MonthGrid:
    """
    Build the calendar grid for a month.

    Args:
        year: Four-digit year
        month: Month number, 1-12
        slots: All slots of the snapshot (soft-deleted ones are skipped)
        today: Day to flag as today (defaults to the local date)

    Returns:
        MonthGrid of full Sunday-first weeks

    Raises:
        ValueError: Month outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")

    today = today or date.today()
    buckets = bucket_by_date(slots)

    weeks = []
    for week in _SUNDAY_FIRST.monthdatescalendar(year, month):
        weeks.append(tuple(
            DayCell(
                date=day,
                in_month=day.month == month,
                is_today=day == today,
                slots=buckets.get(day.isoformat(), ()),
            )
            for day in week
        ))

    return MonthGrid(year=year, month=month, weeks=tuple(weeks))
