# logbook/services/weekly_reviews.py
from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from logbook.errors import TransportFailure, ValidationFailure, commit_or_fail, require_store
from logbook.models.weekly_review import WeeklyReview
from logbook.schemas.schema_review import (
    SCORE_MAX,
    SCORE_MIN,
    CreateWeeklyReview,
    PatchWeeklyReview,
    WeeklyScorePoint,
)
from logbook.utils.dates import resolve_now, week_start_date

logger = logging.getLogger(__name__)


def review_id_for(user_id: str, week_start: dt.datetime) -> str:
    return f"{user_id}_{week_start:%Y%m%d}"


def _validate_score(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if not (SCORE_MIN <= value <= SCORE_MAX):
        raise ValidationFailure(f"{name} は {SCORE_MIN}〜{SCORE_MAX} の範囲で入力してください")


def _validate(data: CreateWeeklyReview | PatchWeeklyReview) -> None:
    _validate_score("stabilityScore", data.stability_score)
    _validate_score("stimulationScore", data.stimulation_score)


def create_weekly_review(
    db: Session,
    user_id: str,
    data: CreateWeeklyReview,
    *,
    now: Optional[dt.datetime] = None,
) -> WeeklyReview:
    """
    이번 주(now 가 속한 주) 리뷰 생성.
    이미 있으면 ValidationFailure. 기존 리뷰 수정은 update / upsert 로.
    """
    require_store(db)
    _validate(data)
    if not data.next_week_task or not data.next_week_task.strip():
        raise ValidationFailure("nextWeekTask は必須です")

    now = resolve_now(now)
    week_start = week_start_date(now)
    review_id = review_id_for(user_id, week_start)
    if db.get(WeeklyReview, review_id) is not None:
        raise ValidationFailure("今週の振り返りはすでに作成されています")

    row = WeeklyReview(
        id=review_id,
        user_id=user_id,
        week_start_date=week_start,
        stability_score=data.stability_score,
        stimulation_score=data.stimulation_score,
        next_week_task=data.next_week_task,
        free_memo=data.free_memo or "",
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        # (userId, weekStartDate) 유니크 충돌 = 동시에 두 번 작성
        db.rollback()
        raise ValidationFailure("今週の振り返りはすでに作成されています") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise TransportFailure("weekly review 생성 실패") from e
    logger.info("weekly review 생성 id=%s", row.id)
    return row


def get_weekly_review(db: Session, user_id: str, review_id: str) -> Optional[WeeklyReview]:
    require_store(db)
    return (
        db.execute(
            select(WeeklyReview).where(
                WeeklyReview.id == review_id,
                WeeklyReview.user_id == user_id,
            )
        )
        .scalars()
        .first()
    )


def update_weekly_review(
    db: Session,
    user_id: str,
    review_id: str,
    patch: PatchWeeklyReview,
    *,
    now: Optional[dt.datetime] = None,
) -> Optional[WeeklyReview]:
    require_store(db)
    _validate(patch)
    row = get_weekly_review(db, user_id, review_id)
    if not row:
        return None

    # None 은 "변경 없음"
    if patch.stability_score is not None:
        row.stability_score = patch.stability_score
    if patch.stimulation_score is not None:
        row.stimulation_score = patch.stimulation_score
    if patch.next_week_task is not None:
        if not patch.next_week_task.strip():
            raise ValidationFailure("nextWeekTask は空にできません")
        row.next_week_task = patch.next_week_task
    if patch.free_memo is not None:
        row.free_memo = patch.free_memo

    row.updated_at = resolve_now(now)
    commit_or_fail(db, "weekly review 수정")
    logger.info("weekly review 수정 id=%s", review_id)
    return row


def get_weekly_review_for_week(
    db: Session,
    user_id: str,
    week_start: dt.datetime | dt.date,
) -> Optional[WeeklyReview]:
    """[해당 주 일요일, 다음 주 일요일) 범위에서 하나"""
    require_store(db)
    start = week_start_date(week_start)
    end = start + dt.timedelta(days=7)
    stmt = (
        select(WeeklyReview)
        .where(
            WeeklyReview.user_id == user_id,
            WeeklyReview.week_start_date >= start,
            WeeklyReview.week_start_date < end,
        )
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def get_current_week_review(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> Optional[WeeklyReview]:
    return get_weekly_review_for_week(db, user_id, resolve_now(now))


def _overwrite(row: WeeklyReview, data: CreateWeeklyReview, now: dt.datetime) -> None:
    row.stability_score = data.stability_score
    row.stimulation_score = data.stimulation_score
    row.next_week_task = data.next_week_task
    row.free_memo = data.free_memo or ""
    row.updated_at = now


def upsert_weekly_review(
    db: Session,
    user_id: str,
    week_start: dt.datetime | dt.date,
    data: CreateWeeklyReview,
    *,
    now: Optional[dt.datetime] = None,
) -> WeeklyReview:
    """
    결정적 키 "<userId>_<yyyyMMdd>" 기준으로 생성 또는 전체 덮어쓰기.
    insert 가 동시 작성과 충돌하면 먼저 들어간 행을 다시 읽어서 덮어쓴다.
    """
    require_store(db)
    _validate(data)
    if not data.next_week_task or not data.next_week_task.strip():
        raise ValidationFailure("nextWeekTask は必須です")

    now = resolve_now(now)
    start = week_start_date(week_start)
    review_id = review_id_for(user_id, start)
    row = db.get(WeeklyReview, review_id)

    if row:
        _overwrite(row, data, now)
        commit_or_fail(db, "weekly review upsert")
        logger.info("weekly review upsert id=%s", row.id)
        return row

    row = WeeklyReview(
        id=review_id,
        user_id=user_id,
        week_start_date=start,
        stability_score=data.stability_score,
        stimulation_score=data.stimulation_score,
        next_week_task=data.next_week_task,
        free_memo=data.free_memo or "",
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        row = db.get(WeeklyReview, review_id)
        if row is None:
            raise TransportFailure("weekly review upsert 실패") from e
        logger.info("weekly review upsert 충돌, 기존 행 덮어쓰기 id=%s", review_id)
        _overwrite(row, data, now)
        commit_or_fail(db, "weekly review upsert")
    except SQLAlchemyError as e:
        db.rollback()
        raise TransportFailure("weekly review upsert 실패") from e

    logger.info("weekly review upsert id=%s", row.id)
    return row


def list_weekly_reviews_by_user(db: Session, user_id: str) -> List[WeeklyReview]:
    """최근 주 먼저"""
    require_store(db)
    stmt = (
        select(WeeklyReview)
        .where(WeeklyReview.user_id == user_id)
        .order_by(WeeklyReview.week_start_date.desc())
    )
    return list(db.execute(stmt).scalars().all())


def should_show_weekly_review_prompt(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> bool:
    """이번 주 리뷰가 없으면 True (요일 제한은 호출 측 정책)"""
    return get_current_week_review(db, user_id, now=now) is None


def weekly_score_series(reviews: List[WeeklyReview]) -> List[WeeklyScorePoint]:
    """차트용: 오래된 주부터"""
    ordered = sorted(reviews, key=lambda r: r.week_start_date)
    return [
        WeeklyScorePoint(
            week_label=f"{r.week_start_date.month}/{r.week_start_date.day}",
            week_start_date=r.week_start_date,
            stability=r.stability_score,
            stimulation=r.stimulation_score,
        )
        for r in ordered
    ]
