# logbook/schemas/schema_insight.py
import datetime as dt
from typing import List, Optional

from logbook.schemas.schema_base import CamelModel


class SummaryItem(CamelModel):
    label: str
    count: int


class SummaryData(CamelModel):
    title: str
    entry_count: int
    average_mood: Optional[float] = None
    top_tags: List[SummaryItem]
    top_weather: List[SummaryItem]


class MoodTrendPoint(CamelModel):
    date: dt.date
    label: str
    average_mood: Optional[float] = None


class ResponseInsights(CamelModel):
    daily: SummaryData
    weekly: SummaryData
    monthly: SummaryData
    mood_trend: List[MoodTrendPoint]
    trend_period: int
