# logbook/services/memos.py
from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from logbook.config.settings import settings
from logbook.errors import ValidationFailure, commit_or_fail, require_store
from logbook.models.memo import Memo
from logbook.schemas.schema_memo import CreateMemo
from logbook.utils.dates import resolve_now, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


def create_memo(
    db: Session,
    user_id: str,
    data: CreateMemo,
    *,
    now: Optional[dt.datetime] = None,
) -> Memo:
    """내용은 memo_max_length(140자)로 조용히 잘라서 저장"""
    require_store(db)
    content = (data.content or "")[: settings.memo_max_length]
    if not content.strip() and not data.image_url:
        raise ValidationFailure("メモの内容か画像が必要です")

    row = Memo(
        id=uuid.uuid4().hex,
        user_id=user_id,
        content=content,
        image_url=data.image_url or "",
        created_at=resolve_now(now),
    )
    db.add(row)
    commit_or_fail(db, "memo 생성")
    logger.info("memo 생성 id=%s user=%s", row.id, user_id)
    return row


def get_memo(db: Session, user_id: str, memo_id: str) -> Optional[Memo]:
    require_store(db)
    return (
        db.execute(select(Memo).where(Memo.id == memo_id, Memo.user_id == user_id))
        .scalars()
        .first()
    )


def delete_memo(db: Session, user_id: str, memo_id: str) -> bool:
    require_store(db)
    row = get_memo(db, user_id, memo_id)
    if not row:
        return False
    db.delete(row)
    commit_or_fail(db, "memo 삭제")
    logger.info("memo 삭제 id=%s user=%s", memo_id, user_id)
    return True


def list_memos_by_user(
    db: Session,
    user_id: str,
    max_count: int = DEFAULT_LIST_LIMIT,
) -> List[Memo]:
    """최신순, 최대 max_count 개"""
    require_store(db)
    if max_count < 1:
        raise ValidationFailure("max_count は 1 以上")
    stmt = (
        select(Memo)
        .where(Memo.user_id == user_id)
        .order_by(Memo.created_at.desc(), Memo.id.desc())
        .limit(max_count)
    )
    return list(db.execute(stmt).scalars().all())


def list_today_memos(
    db: Session,
    user_id: str,
    *,
    now: Optional[dt.datetime] = None,
) -> List[Memo]:
    """[오늘 00:00, 내일 00:00) 범위, 최신순"""
    require_store(db)
    today = start_of_day(resolve_now(now))
    tomorrow = today + dt.timedelta(days=1)
    stmt = (
        select(Memo)
        .where(
            Memo.user_id == user_id,
            Memo.created_at >= today,
            Memo.created_at < tomorrow,
        )
        .order_by(Memo.created_at.desc(), Memo.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
