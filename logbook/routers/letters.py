# logbook/routers/letters.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.models.future_letter import FutureLetter
from logbook.models.users import User
from logbook.schemas.schema_letter import (
    CreateFutureLetter,
    ResponseFutureLetter,
    ResponseUnreadCount,
)
from logbook.services.future_letters import (
    classify_letter,
    count_unread_delivered,
    create_future_letter,
    delete_future_letter,
    list_delivered_letters,
    list_future_letters_by_user,
    list_pending_letters,
    open_future_letter,
)
from logbook.utils.dates import now_local

router = APIRouter(prefix="/letters", tags=["未来への手紙"])


def to_response(row: FutureLetter, now: dt.datetime) -> ResponseFutureLetter:
    return ResponseFutureLetter(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        period=row.period,
        delivery_date=row.delivery_date,
        is_opened=row.is_opened,
        opened_at=row.opened_at,
        created_at=row.created_at,
        status=classify_letter(row, now),
    )


@router.post("", response_model=ResponseFutureLetter, status_code=status.HTTP_201_CREATED)
def post_letter(
    body: CreateFutureLetter,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    period: short(30~180일) / medium(180~365일) / long(365~730일) 중 랜덤,
    custom 이면 customDate 그대로. 배달일은 이후 바뀌지 않는다.
    """
    now = now_local()
    row = create_future_letter(db, current_user.uid, body, now=now)
    return to_response(row, now)


@router.get("", response_model=List[ResponseFutureLetter])
def get_letters(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    return [to_response(r, now) for r in list_future_letters_by_user(db, current_user.uid)]


@router.get("/delivered", response_model=List[ResponseFutureLetter])
def get_delivered(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    return [to_response(r, now) for r in list_delivered_letters(db, current_user.uid, now=now)]


@router.get("/pending", response_model=List[ResponseFutureLetter])
def get_pending(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    return [to_response(r, now) for r in list_pending_letters(db, current_user.uid, now=now)]


@router.get("/unread-count", response_model=ResponseUnreadCount)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ResponseUnreadCount(unread_count=count_unread_delivered(db, current_user.uid))


@router.post("/{letter_id}/open", response_model=ResponseFutureLetter)
def post_open_letter(
    letter_id: str,
    restamp: Optional[bool] = Query(default=None, description="既に開封済みでも openedAt を更新するか"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    row = open_future_letter(db, current_user.uid, letter_id, restamp=restamp, now=now)
    if not row:
        raise HTTPException(status_code=404, detail="Letter not found")
    return to_response(row, now)


@router.delete("/{letter_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_letter(
    letter_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not delete_future_letter(db, current_user.uid, letter_id):
        raise HTTPException(status_code=404, detail="Letter not found")
