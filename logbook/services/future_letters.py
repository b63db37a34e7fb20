# logbook/services/future_letters.py
"""
미래의 나에게 보내는 편지.

배달일(deliveryDate)은 생성 시 한 번만 계산해서 저장하고 다시 계산하지 않는다.
"도착/대기" 상태는 저장하지 않는다. 조회 시점의 now 와 deliveryDate 를 비교해서
그때그때 계산하므로, 같은 편지가 두 번의 조회 사이에 대기 → 도착으로 바뀔 수 있다.
(결과를 캐시하지 말고 매번 다시 조회할 것)
"""
from __future__ import annotations

import datetime as dt
import logging
import random
import uuid
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from logbook.config.settings import settings
from logbook.errors import ValidationFailure, commit_or_fail, require_store
from logbook.models.future_letter import FutureLetter, LetterPeriod
from logbook.schemas.schema_letter import CreateFutureLetter
from logbook.utils.dates import resolve_now, to_local_naive

logger = logging.getLogger(__name__)

# 기간별 랜덤 일수 범위 (양끝 포함)
PERIOD_DAY_RANGES: Dict[LetterPeriod, Tuple[int, int]] = {
    LetterPeriod.short: (30, 180),     # 1개월 ~ 반년
    LetterPeriod.medium: (180, 365),   # 반년 ~ 1년
    LetterPeriod.long: (365, 730),     # 1년 ~ 2년
}

STATUS_PENDING = "pending"
STATUS_UNOPENED = "unopened"
STATUS_OPENED = "opened"


def generate_random_delivery_date(
    period: LetterPeriod,
    *,
    now: Optional[dt.datetime] = None,
    rng: Optional[random.Random] = None,
) -> dt.datetime:
    if period not in PERIOD_DAY_RANGES:
        raise ValidationFailure("custom 期間は customDate が必要です")
    min_days, max_days = PERIOD_DAY_RANGES[period]
    offset_days = (rng or random).randint(min_days, max_days)
    return resolve_now(now) + dt.timedelta(days=offset_days)


def _custom_delivery_date(value: dt.date | dt.datetime) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return to_local_naive(value)
    return dt.datetime(value.year, value.month, value.day)


def create_future_letter(
    db: Session,
    user_id: str,
    data: CreateFutureLetter,
    *,
    now: Optional[dt.datetime] = None,
    rng: Optional[random.Random] = None,
) -> FutureLetter:
    require_store(db)
    if not data.title.strip() or not data.content.strip():
        raise ValidationFailure("title と content は必須です")

    now = resolve_now(now)
    if data.period == LetterPeriod.custom:
        if data.custom_date is None:
            raise ValidationFailure("custom 期間は customDate が必要です")
        delivery_date = _custom_delivery_date(data.custom_date)
    else:
        delivery_date = generate_random_delivery_date(data.period, now=now, rng=rng)

    row = FutureLetter(
        id=uuid.uuid4().hex,
        user_id=user_id,
        title=data.title,
        content=data.content,
        period=data.period,
        delivery_date=delivery_date,
        is_opened=False,
        opened_at=None,
        created_at=now,
    )
    db.add(row)
    commit_or_fail(db, "letter 생성")
    logger.info("letter 생성 id=%s user=%s delivery=%s", row.id, user_id, delivery_date)
    return row


def get_future_letter(db: Session, user_id: str, letter_id: str) -> Optional[FutureLetter]:
    require_store(db)
    return (
        db.execute(
            select(FutureLetter).where(
                FutureLetter.id == letter_id,
                FutureLetter.user_id == user_id,
            )
        )
        .scalars()
        .first()
    )


def open_future_letter(
    db: Session,
    user_id: str,
    letter_id: str,
    *,
    restamp: Optional[bool] = None,
    now: Optional[dt.datetime] = None,
) -> Optional[FutureLetter]:
    """
    isOpened=True, openedAt=now.
    이미 열린 편지: restamp=True 면 openedAt 갱신, False 면 아무 것도 안 함.
    restamp 미지정 시 settings.letter_reopen_restamps 사용.
    아직 도착하지 않은 편지는 열 수 없다.
    """
    require_store(db)
    row = get_future_letter(db, user_id, letter_id)
    if not row:
        return None

    now = resolve_now(now)
    if row.delivery_date > now:
        raise ValidationFailure("まだ届いていない手紙は開封できません")

    if restamp is None:
        restamp = settings.letter_reopen_restamps
    if row.is_opened and not restamp:
        return row

    row.is_opened = True
    row.opened_at = now
    commit_or_fail(db, "letter 개봉")
    logger.info("letter 개봉 id=%s user=%s", letter_id, user_id)
    return row


def delete_future_letter(db: Session, user_id: str, letter_id: str) -> bool:
    require_store(db)
    row = get_future_letter(db, user_id, letter_id)
    if not row:
        return False
    db.delete(row)
    commit_or_fail(db, "letter 삭제")
    logger.info("letter 삭제 id=%s user=%s", letter_id, user_id)
    return True


def list_future_letters_by_user(db: Session, user_id: str) -> List[FutureLetter]:
    """배달일 오름차순"""
    require_store(db)
    stmt = (
        select(FutureLetter)
        .where(FutureLetter.user_id == user_id)
        .order_by(FutureLetter.delivery_date.asc(), FutureLetter.id.asc())
    )
    return list(db.execute(stmt).scalars().all())


def classify_letter(letter: FutureLetter, now: dt.datetime) -> str:
    if letter.delivery_date > now:
        return STATUS_PENDING
    return STATUS_OPENED if letter.is_opened else STATUS_UNOPENED


def partition_letters(
    letters: List[FutureLetter],
    now: dt.datetime,
) -> Tuple[List[FutureLetter], List[FutureLetter]]:
    """
    (delivered, pending) 로 나눈다.
    delivered: 배달일 내림차순 / pending: 배달일 오름차순
    """
    delivered = [l for l in letters if l.delivery_date <= now]
    pending = [l for l in letters if l.delivery_date > now]
    delivered.sort(key=lambda l: l.delivery_date, reverse=True)
    pending.sort(key=lambda l: l.delivery_date)
    return delivered, pending


def list_delivered_letters(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> List[FutureLetter]:
    delivered, _ = partition_letters(list_future_letters_by_user(db, user_id), resolve_now(now))
    return delivered


def list_pending_letters(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> List[FutureLetter]:
    _, pending = partition_letters(list_future_letters_by_user(db, user_id), resolve_now(now))
    return pending


def count_unread_delivered(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> int:
    return sum(1 for l in list_delivered_letters(db, user_id, now=now) if not l.is_opened)
