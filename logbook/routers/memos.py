# logbook/routers/memos.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.models.users import User
from logbook.schemas.schema_memo import CreateMemo, ResponseMemo
from logbook.services.memos import (
    DEFAULT_LIST_LIMIT,
    create_memo,
    delete_memo,
    list_memos_by_user,
    list_today_memos,
)

router = APIRouter(prefix="/memos", tags=["クイックメモ"])


@router.post("", response_model=ResponseMemo, status_code=status.HTTP_201_CREATED)
def post_memo(
    body: CreateMemo,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """140자를 넘는 내용은 잘라서 저장 (에러 아님)"""
    return create_memo(db, current_user.uid, body)


@router.get("", response_model=List[ResponseMemo])
def get_memos(
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_memos_by_user(db, current_user.uid, limit)


@router.get("/today", response_model=List[ResponseMemo])
def get_today_memos(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_today_memos(db, current_user.uid)


@router.delete("/{memo_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_memo(
    memo_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not delete_memo(db, current_user.uid, memo_id):
        raise HTTPException(status_code=404, detail="Memo not found")
