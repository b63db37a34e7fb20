# logbook/services/insights.py
from __future__ import annotations

import datetime as dt
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

import icu

from logbook.models.entry import Entry
from logbook.schemas.schema_insight import (
    MoodTrendPoint,
    ResponseInsights,
    SummaryData,
    SummaryItem,
)
from logbook.utils.dates import month_start, start_of_day, week_start_date

TREND_PERIODS = (7, 30)

# 동률 라벨 정렬용 로케일 콜레이션 (알파벳은 대소문자보다 철자 우선, 가나는 50음순)
_COLLATOR = icu.Collator.createInstance(icu.Locale("ja_JP"))


def round_half_up(value: float, digits: int) -> float:
    quant = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))


def collect_top_items(values: Iterable[Optional[str]], limit: int = 5) -> List[SummaryItem]:
    """
    공백 제거 후 빈 값은 버리고 빈도순(내림차순), 같으면 라벨 오름차순 (ja_JP 콜레이션).
    """
    counts = Counter(v.strip() for v in values if v and v.strip())
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], _COLLATOR.getSortKey(kv[0]), kv[0]))
    return [SummaryItem(label=label, count=count) for label, count in ranked[:limit]]


def average_mood(entries: Iterable[Entry], digits: int = 1) -> Optional[float]:
    moods = [e.mood for e in entries if e.mood is not None]
    if not moods:
        return None
    return round_half_up(sum(moods) / len(moods), digits)


def create_summary(title: str, entries: Sequence[Entry]) -> SummaryData:
    return SummaryData(
        title=title,
        entry_count=len(entries),
        average_mood=average_mood(entries),
        top_tags=collect_top_items((tag for e in entries for tag in (e.tags or [])), 5),
        top_weather=collect_top_items((e.weather for e in entries), 3),
    )


def build_mood_trend(
    entries: Sequence[Entry],
    reference_date: dt.date | dt.datetime,
    period_days: int,
) -> List[MoodTrendPoint]:
    """reference_date 로 끝나는 period_days 일, 오래된 날부터 하루 1포인트"""
    if period_days < 1:
        return []
    end_day = start_of_day(reference_date).date()
    by_day: dict = {}
    for e in entries:
        if e.mood is None:
            continue
        by_day.setdefault(e.created_at.date(), []).append(e.mood)

    points = []
    for offset in range(period_days - 1, -1, -1):
        day = end_day - dt.timedelta(days=offset)
        moods = by_day.get(day)
        avg = round_half_up(sum(moods) / len(moods), 2) if moods else None
        points.append(MoodTrendPoint(date=day, label=f"{day.month}/{day.day}", average_mood=avg))
    return points


def _entries_since(entries: Sequence[Entry], start: dt.datetime, end: dt.datetime) -> List[Entry]:
    return [e for e in entries if start <= e.created_at < end]


def build_insights(
    entries: Sequence[Entry],
    reference: dt.datetime,
    trend_days: int = 7,
) -> ResponseInsights:
    """오늘 / 이번 주(일요일 시작) / 이번 달 요약 + 기분 추이"""
    tomorrow = start_of_day(reference) + dt.timedelta(days=1)
    daily = _entries_since(entries, start_of_day(reference), tomorrow)
    weekly = _entries_since(entries, week_start_date(reference), tomorrow)
    monthly = _entries_since(entries, month_start(reference), tomorrow)

    return ResponseInsights(
        daily=create_summary("今日", daily),
        weekly=create_summary("今週", weekly),
        monthly=create_summary("今月", monthly),
        mood_trend=build_mood_trend(entries, reference, trend_days),
        trend_period=trend_days,
    )
