# logbook/auth/dependencies.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from logbook.auth.token_verifier import is_anonymous_token, verify_firebase_id_token
from logbook.db.database import get_db
from logbook.models.users import User
from logbook.services.users import get_or_create_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    # Authorization: Bearer <token> 우선, 없으면 헤더 직접 확인
    if bearer and getattr(bearer, "scheme", "").lower() == "bearer":
        return bearer.credentials
    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer "):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "認証ヘッダーがありません")
    return header.replace("Bearer ", "", 1).strip()


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> User:
    payload = verify_firebase_id_token(token)
    if payload is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "無効な ID トークンです")

    uid = payload.get("uid") or payload.get("sub")
    if not uid:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "ID トークンに uid がありません")

    return get_or_create_user(
        db,
        uid,
        display_name=payload.get("name"),
        is_anonymous=is_anonymous_token(payload),
    )
