# logbook/routers/exports.py
from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.errors import ValidationFailure, commit_or_fail
from logbook.models.entry_export import EntryExport
from logbook.models.users import User
from logbook.services.entries import list_entries_by_date_range, list_entries_by_user
from logbook.services.export import (
    build_unified_items,
    entries_to_csv,
    entries_to_text,
    memos_to_csv,
    memos_to_text,
    range_export_filename,
    unified_export_filename,
    unified_to_csv,
)
from logbook.services.memos import list_memos_by_user
from logbook.services.timeline import filter_entries_by_day
from logbook.utils.dates import now_local

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exports", tags=["エクスポート"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
EXPORT_MEMO_LIMIT = 10000


def csv_response(body: str, filename: str) -> Response:
    return Response(
        content=body.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def record_export(db: Session, user_id: str, start: dt.datetime, end: dt.datetime, filename: str) -> EntryExport:
    row = EntryExport(
        id=uuid.uuid4().hex,
        user_id=user_id,
        range_start=start,
        range_end=end,
        filename=filename,
        created_at=now_local(),
    )
    db.add(row)
    commit_or_fail(db, "export 기록")
    return row


@router.get("/entries.csv")
def export_entries_csv(
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    ex) /exports/entries.csv?start=2025-11-01&end=2025-11-30 \n
    파일명: logbook_20251101_20251130.csv
    """
    if start > end:
        raise ValidationFailure("start は end 以前である必要があります")
    range_start = dt.datetime(start.year, start.month, start.day)
    range_end = dt.datetime(end.year, end.month, end.day, 23, 59, 59, 999999)

    entries = list_entries_by_date_range(db, current_user.uid, range_start, range_end)
    filename = range_export_filename(start, end)
    record_export(db, current_user.uid, range_start, range_end, filename)
    logger.info("CSV 내보내기 user=%s rows=%d file=%s", current_user.uid, len(entries), filename)
    return csv_response(entries_to_csv(entries), filename)


@router.get("/entries.txt", response_class=PlainTextResponse)
def export_entries_text(
    day: Optional[dt.date] = Query(default=None, description="省略時は全件"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """클립보드 복사용 텍스트 (최신순)"""
    entries = list_entries_by_user(db, current_user.uid)
    if day is not None:
        entries = filter_entries_by_day(entries, day)
    return entries_to_text(entries)


@router.get("/memos.csv")
def export_memos_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    memos = list_memos_by_user(db, current_user.uid, EXPORT_MEMO_LIMIT)
    return csv_response(memos_to_csv(memos), f"logbook_memos_{now_local():%Y%m%d}.csv")


@router.get("/memos.txt", response_class=PlainTextResponse)
def export_memos_text(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return memos_to_text(list_memos_by_user(db, current_user.uid, EXPORT_MEMO_LIMIT))


@router.get("/unified.csv")
def export_unified_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """일기 + 메모 통합, 파일명 logbook_<오늘>.csv"""
    items = build_unified_items(
        list_entries_by_user(db, current_user.uid),
        list_memos_by_user(db, current_user.uid, EXPORT_MEMO_LIMIT),
    )
    return csv_response(unified_to_csv(items), unified_export_filename(now_local()))
