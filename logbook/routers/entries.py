# logbook/routers/entries.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.models.users import User
from logbook.schemas.schema_entry import CreateEntry, PatchEntry, ResponseEntry
from logbook.services.entries import (
    create_entry,
    delete_entry,
    get_entry,
    list_entries_by_date_range,
    list_entries_by_user,
    search_entries,
    update_entry,
)

router = APIRouter(prefix="/entries", tags=["日記"])


@router.post("", response_model=ResponseEntry, status_code=status.HTTP_201_CREATED)
def post_entry(
    body: CreateEntry,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_entry(db, current_user.uid, body)


@router.get("", response_model=List[ResponseEntry])
def get_entries(
    q: Optional[str] = Query(default=None, description="検索語 (本文/タイトル/天気/タグ/体調)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """최신순. q 가 있으면 검색 결과만"""
    if q:
        return search_entries(db, current_user.uid, q)
    return list_entries_by_user(db, current_user.uid)


@router.get("/range", response_model=List[ResponseEntry])
def get_entries_in_range(
    start: dt.datetime = Query(...),
    end: dt.datetime = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    ex) /entries/range?start=2025-11-01T00:00:00&end=2025-11-30T23:59:59 \n
    양끝 포함, 최신순
    """
    return list_entries_by_date_range(db, current_user.uid, start, end)


@router.get("/{entry_id}", response_model=ResponseEntry)
def get_entry_by_id(
    entry_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = get_entry(db, current_user.uid, entry_id)
    if not row:
        raise HTTPException(status_code=404, detail="Entry not found")
    return row


@router.patch("/{entry_id}", response_model=ResponseEntry)
def patch_entry(
    entry_id: str,
    body: PatchEntry,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = update_entry(db, current_user.uid, entry_id, body)
    if not row:
        raise HTTPException(status_code=404, detail="Entry not found")
    return row


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not delete_entry(db, current_user.uid, entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
