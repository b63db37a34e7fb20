# logbook/routers/reviews.py
from __future__ import annotations

import datetime as dt
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.models.users import User
from logbook.schemas.schema_review import (
    CreateWeeklyReview,
    PatchWeeklyReview,
    ResponseReviewPrompt,
    ResponseWeeklyReview,
    WeeklyScorePoint,
)
from logbook.services.weekly_reviews import (
    create_weekly_review,
    get_current_week_review,
    get_weekly_review_for_week,
    list_weekly_reviews_by_user,
    should_show_weekly_review_prompt,
    update_weekly_review,
    upsert_weekly_review,
    weekly_score_series,
)
from logbook.utils.dates import now_local, week_start_date

router = APIRouter(prefix="/reviews", tags=["週次振り返り"])


@router.post("", response_model=ResponseWeeklyReview, status_code=status.HTTP_201_CREATED)
def post_review(
    body: CreateWeeklyReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """이번 주 리뷰 생성. 이미 있으면 422 (수정은 PUT /reviews/current)"""
    return create_weekly_review(db, current_user.uid, body)


@router.put("/current", response_model=ResponseWeeklyReview)
def put_current_review(
    body: CreateWeeklyReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    return upsert_weekly_review(db, current_user.uid, now, body, now=now)


@router.get("", response_model=List[ResponseWeeklyReview])
def get_reviews(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_weekly_reviews_by_user(db, current_user.uid)


@router.get("/current", response_model=ResponseWeeklyReview)
def get_current_review(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = get_current_week_review(db, current_user.uid)
    if not row:
        # 이번 주 아직 안 씀
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return row


@router.get("/week", response_model=ResponseWeeklyReview)
def get_review_for_week(
    date: dt.date = Query(..., description="その週に含まれる任意の日付"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = get_weekly_review_for_week(db, current_user.uid, date)
    if not row:
        raise HTTPException(status_code=404, detail="Review not found")
    return row


@router.get("/prompt", response_model=ResponseReviewPrompt)
def get_review_prompt(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = now_local()
    return ResponseReviewPrompt(
        should_prompt=should_show_weekly_review_prompt(db, current_user.uid, now=now),
        week_start_date=week_start_date(now),
    )


@router.get("/series", response_model=List[WeeklyScorePoint])
def get_score_series(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return weekly_score_series(list_weekly_reviews_by_user(db, current_user.uid))


@router.patch("/{review_id}", response_model=ResponseWeeklyReview)
def patch_review(
    review_id: str,
    body: PatchWeeklyReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = update_weekly_review(db, current_user.uid, review_id, body)
    if not row:
        raise HTTPException(status_code=404, detail="Review not found")
    return row
