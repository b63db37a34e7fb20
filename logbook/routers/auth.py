# logbook/routers/auth.py
# 로그인 자체(익명 / OAuth)는 클라이언트가 Firebase JS SDK 로 처리하고
# 서버는 ID 토큰 검증 + 유저 등록만 한다
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from firebase_admin.exceptions import FirebaseError
from pydantic import Field
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.auth.token_verifier import (
    is_anonymous_token,
    revoke_user_sessions,
    verify_firebase_id_token,
)
from logbook.db.database import get_db
from logbook.errors import TransportFailure
from logbook.models.users import User
from logbook.schemas.schema_base import CamelModel
from logbook.services.users import get_or_create_user

router = APIRouter(prefix="/auth", tags=["認証"])


class LoginRequest(CamelModel):
    id_token: str = Field(min_length=1)


class ResponseUser(CamelModel):
    uid: str
    display_name: Optional[str] = None
    is_anonymous: bool
    created_at: dt.datetime


@router.post("/login", response_model=ResponseUser)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    클라이언트가 signIn 후 받은 idToken 을 전달 → 검증 후 유저 정보 반환
    (처음 보는 uid 면 등록)
    """
    payload = verify_firebase_id_token(request.id_token)
    if not payload:
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


@router.get("/me", response_model=ResponseUser)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(current_user: User = Depends(get_current_user)):
    """
    refresh 토큰을 폐기한다. 이미 발급된 ID 토큰은 만료(최대 1시간)까지 유효하므로
    클라이언트도 signOut() 해야 한다.
    """
    try:
        revoke_user_sessions(current_user.uid)
    except FirebaseError as e:
        raise TransportFailure("サインアウトに失敗しました") from e
    return {"message": "サインアウトしました", "uid": current_user.uid}
