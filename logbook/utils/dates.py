# logbook/utils/dates.py
# DB에는 tz 없는 로컬 시각(settings.timezone 기준)으로 저장한다
from __future__ import annotations

import datetime as dt
from typing import Optional

from logbook.config.settings import settings


def now_local() -> dt.datetime:
    return dt.datetime.now(settings.tz).replace(tzinfo=None)


def resolve_now(now: Optional[dt.datetime]) -> dt.datetime:
    if now is None:
        return now_local()
    if now.tzinfo is not None:
        return now.astimezone(settings.tz).replace(tzinfo=None)
    return now


def to_local_naive(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is not None:
        return value.astimezone(settings.tz).replace(tzinfo=None)
    return value


def start_of_day(value: dt.datetime | dt.date) -> dt.datetime:
    if isinstance(value, dt.datetime):
        value = value.date()
    return dt.datetime(value.year, value.month, value.day)


def week_start_date(value: Optional[dt.datetime | dt.date] = None) -> dt.datetime:
    """value가 속한 주의 일요일 00:00"""
    base = start_of_day(value if value is not None else now_local())
    # weekday(): 월=0 ... 일=6  →  일요일부터 지난 일수
    days_since_sunday = (base.weekday() + 1) % 7
    return base - dt.timedelta(days=days_since_sunday)


def is_sunday(value: Optional[dt.datetime | dt.date] = None) -> bool:
    value = value if value is not None else now_local()
    return value.weekday() == 6


def month_start(value: dt.datetime | dt.date) -> dt.datetime:
    return dt.datetime(value.year, value.month, 1)
