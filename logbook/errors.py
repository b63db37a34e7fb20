# logbook/errors.py
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class LogBookError(Exception):
    """모든 LogBook 에러의 기본 클래스"""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class StoreUnavailable(LogBookError):
    """저장소 핸들이 없음 (설정 누락). 네트워크 호출 전에 발생."""

    status_code = 503


class ValidationFailure(LogBookError):
    status_code = 422


class NotFound(LogBookError):
    status_code = 404


class TransportFailure(LogBookError):
    """백엔드/네트워크 오류. 원인은 __cause__ 에 있음."""

    status_code = 502


def require_store(db: Optional[Any]) -> None:
    if db is None:
        raise StoreUnavailable("저장소가 초기화되지 않았습니다")


def commit_or_fail(db: Session, action: str) -> None:
    """commit 실패 시 rollback 후 TransportFailure 로 감싼다."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise TransportFailure(f"{action} 실패") from e
