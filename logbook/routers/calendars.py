# logbook/routers/calendars.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.models.users import User
from logbook.schemas.schema_calendar import CalendarMonth, ResponseSekki, Timeline
from logbook.services.entries import list_entries_by_user
from logbook.services.sekki import (
    get_current_sekki,
    get_days_until_next_sekki,
    get_next_sekki,
    get_sekki_class_name,
)
from logbook.services.timeline import build_month_calendar, build_timeline
from logbook.utils.dates import now_local

router = APIRouter(prefix="/calendar", tags=["カレンダー"])


@router.get("/month", response_model=CalendarMonth)
def get_month(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    today = now_local().date()
    return build_month_calendar(
        year or today.year,
        month or today.month,
        list_entries_by_user(db, current_user.uid),
        today,
    )


@router.get("/timeline", response_model=Timeline)
def get_timeline(
    years: int = Query(default=1, description="1 / 3 / 5"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return build_timeline(list_entries_by_user(db, current_user.uid), years, now_local().date())


@router.get("/sekki", response_model=ResponseSekki)
def get_sekki():
    """인증 불필요 (테마용)"""
    now = now_local()
    current = get_current_sekki(now)
    return ResponseSekki(
        current=current,
        next=get_next_sekki(now),
        days_until_next=get_days_until_next_sekki(now),
        class_name=get_sekki_class_name(current.name) if current else None,
    )
