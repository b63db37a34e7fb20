# logbook/auth/token_verifier.py
import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

logger = logging.getLogger(__name__)


def verify_firebase_id_token(token: str) -> Optional[dict]:
    """
    Firebase ID 토큰 검증 (서명 / aud / iss / exp 는 SDK가 처리)
    실패하면 None
    """
    if not token or not firebase_admin._apps:
        return None
    try:
        return auth.verify_id_token(token)
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        logger.info("ID 토큰 검증 실패: %s", e.__class__.__name__)
        return None


def is_anonymous_token(payload: dict) -> bool:
    firebase_claim = payload.get("firebase") or {}
    return firebase_claim.get("sign_in_provider") == "anonymous"


def revoke_user_sessions(uid: str) -> None:
    """refresh 토큰 폐기 = 서버 기준 로그아웃"""
    try:
        auth.revoke_refresh_tokens(uid)
    except FirebaseError as e:
        logger.error("refresh 토큰 폐기 실패 uid=%s: %s", uid, e)
        raise
