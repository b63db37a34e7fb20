# logbook/services/users.py
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from logbook.errors import TransportFailure, commit_or_fail, require_store
from logbook.models.users import User
from logbook.utils.dates import resolve_now

logger = logging.getLogger(__name__)


def get_or_create_user(
    db: Session,
    uid: str,
    *,
    display_name: Optional[str] = None,
    is_anonymous: bool = True,
    now: Optional[dt.datetime] = None,
) -> User:
    """
    익명 로그인은 별도 가입 절차가 없으므로 처음 보는 uid 면 바로 등록.
    """
    require_store(db)
    user = db.get(User, uid)
    if user:
        if display_name and user.display_name != display_name:
            user.display_name = display_name
            user.is_anonymous = is_anonymous
            commit_or_fail(db, "user 갱신")
        return user

    user = User(
        uid=uid,
        display_name=display_name,
        is_anonymous=is_anonymous,
        created_at=resolve_now(now),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # 같은 uid 의 첫 요청이 동시에 들어온 경우: 먼저 등록된 쪽을 그대로 사용
        db.rollback()
        existing = db.get(User, uid)
        if existing is None:
            raise TransportFailure("user 등록 실패") from e
        return existing
    except SQLAlchemyError as e:
        db.rollback()
        raise TransportFailure("user 등록 실패") from e
    logger.info("신규 user 등록 uid=%s anonymous=%s", uid, is_anonymous)
    return user
