# logbook/services/timeline.py
from __future__ import annotations

import calendar
import datetime as dt
from typing import Dict, List, Sequence

from logbook.constants.entry import mood_emoji
from logbook.errors import ValidationFailure
from logbook.models.entry import Entry
from logbook.schemas.schema_calendar import (
    CalendarDay,
    CalendarMonth,
    DayGroup,
    MonthData,
    Timeline,
    TimelineEntry,
)

RANGE_OPTIONS = (1, 3, 5)
SNIPPET_LENGTH = 80


def build_snippet(content: str, max_length: int = SNIPPET_LENGTH) -> str:
    if len(content) <= max_length:
        return content
    return f"{content[:max_length]}..."


def filter_entries_by_day(entries: Sequence[Entry], day: dt.date) -> List[Entry]:
    return [e for e in entries if e.created_at.date() == day]


def _timeline_entry(entry: Entry) -> TimelineEntry:
    return TimelineEntry(
        id=entry.id,
        time=f"{entry.created_at:%H:%M}",
        title=entry.title or "",
        snippet=build_snippet(entry.content),
        mood=entry.mood,
        mood_emoji=mood_emoji(entry.mood) if entry.mood is not None else None,
    )


def group_entries_by_day(entries: Sequence[Entry]) -> Dict[dt.date, List[Entry]]:
    """로컬 날짜별로 묶고 하루 안에서는 시간순"""
    groups: Dict[dt.date, List[Entry]] = {}
    for entry in sorted(entries, key=lambda e: e.created_at):
        groups.setdefault(entry.created_at.date(), []).append(entry)
    return groups


def build_timeline(entries: Sequence[Entry], range_years: int, today: dt.date) -> Timeline:
    """
    (today.year - range_years + 1)년 1월 ~ 이번 달까지 한 달씩.
    엔트리가 없는 달도 빈 days 로 포함한다.
    """
    if range_years not in RANGE_OPTIONS:
        raise ValidationFailure(f"range_years は {RANGE_OPTIONS} のいずれか")

    start_year = today.year - (range_years - 1)
    in_range = [e for e in entries if start_year <= e.created_at.year <= today.year]

    by_month: Dict[tuple, List[DayGroup]] = {}
    for day, day_entries in group_entries_by_day(in_range).items():
        by_month.setdefault((day.year, day.month), []).append(
            DayGroup(date=day, entries=[_timeline_entry(e) for e in day_entries])
        )

    months = []
    for year in range(start_year, today.year + 1):
        last_month = today.month if year == today.year else 12
        for month in range(1, last_month + 1):
            days = sorted(by_month.get((year, month), []), key=lambda d: d.date)
            months.append(
                MonthData(
                    year=year,
                    month=month,
                    days=days,
                    entry_count=sum(len(d.entries) for d in days),
                )
            )

    return Timeline(
        range_years=range_years,
        years=list(range(start_year, today.year + 1)),
        months=months,
    )


def build_month_calendar(
    year: int,
    month: int,
    entries: Sequence[Entry],
    today: dt.date,
) -> CalendarMonth:
    """일요일 시작 주 단위로 해당 월을 덮는 날짜들"""
    if not 1 <= month <= 12:
        raise ValidationFailure("month は 1〜12")

    counts: Dict[dt.date, int] = {}
    for entry in entries:
        day = entry.created_at.date()
        counts[day] = counts.get(day, 0) + 1

    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    weeks = [
        [
            CalendarDay(
                date=day,
                in_month=day.month == month,
                is_today=day == today,
                entry_count=counts.get(day, 0),
            )
            for day in week
        ]
        for week in cal.monthdatescalendar(year, month)
    ]
    return CalendarMonth(year=year, month=month, weeks=weeks)
