# logbook/schemas/schema_calendar.py
import datetime as dt
from typing import List, Optional

from logbook.schemas.schema_base import CamelModel


class CalendarDay(CamelModel):
    date: dt.date
    in_month: bool
    is_today: bool
    entry_count: int


class CalendarMonth(CamelModel):
    year: int
    month: int
    weeks: List[List[CalendarDay]]


class TimelineEntry(CamelModel):
    id: str
    time: str
    title: str
    snippet: str
    mood: Optional[int] = None
    mood_emoji: Optional[str] = None


class DayGroup(CamelModel):
    date: dt.date
    entries: List[TimelineEntry]


class MonthData(CamelModel):
    year: int
    month: int
    days: List[DayGroup]
    entry_count: int


class Timeline(CamelModel):
    range_years: int
    years: List[int]
    months: List[MonthData]


class SekkiInfo(CamelModel):
    name: str
    date: dt.datetime
    season: str
    description: str


class ResponseSekki(CamelModel):
    current: Optional[SekkiInfo] = None
    next: Optional[SekkiInfo] = None
    days_until_next: Optional[int] = None
    class_name: Optional[str] = None
