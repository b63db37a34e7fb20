# logbook/services/storage.py
# 이미지 업로드 (Firebase Storage). 경로: entries/<userId>/<epoch millis>_<파일명>
from __future__ import annotations

import logging
import time
from typing import Optional
from urllib.parse import unquote, urlparse

import firebase_admin
from firebase_admin import storage
from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPIError

from logbook.config.settings import settings
from logbook.errors import StoreUnavailable, TransportFailure, ValidationFailure

logger = logging.getLogger(__name__)


def _firebase_ready() -> bool:
    # main.py lifespan 에서 initialize_app 되었는지 체크
    return bool(getattr(firebase_admin, "_apps", None))


def _bucket():
    if not _firebase_ready():
        raise StoreUnavailable("Firebase Admin SDK가 초기화되지 않았습니다 (firebase-key.json 확인)")
    if not settings.firebase_storage_bucket:
        raise StoreUnavailable("firebase_storage_bucket 이 설정되지 않았습니다")
    return storage.bucket(settings.firebase_storage_bucket)


def build_image_path(user_id: str, filename: str, *, millis: Optional[int] = None) -> str:
    if millis is None:
        millis = int(time.time() * 1000)
    safe_name = filename.replace("/", "_").strip() or "image"
    return f"entries/{user_id}/{millis}_{safe_name}"


def path_from_url(url: str) -> Optional[str]:
    """
    public URL -> 버킷 내 object 경로
      https://storage.googleapis.com/<bucket>/<path>
      https://firebasestorage.googleapis.com/v0/b/<bucket>/o/<encoded path>?alt=media
    """
    parsed = urlparse(url)
    parts = parsed.path.lstrip("/").split("/")
    if parsed.netloc == "storage.googleapis.com" and len(parts) >= 2:
        return unquote("/".join(parts[1:]))
    if parsed.netloc == "firebasestorage.googleapis.com" and "o" in parts:
        return unquote("/".join(parts[parts.index("o") + 1:]))
    return None


def upload_image(user_id: str, filename: str, data: bytes, content_type: Optional[str] = None) -> str:
    if not data:
        raise ValidationFailure("空のファイルはアップロードできません")
    if len(data) > settings.image_max_bytes:
        raise ValidationFailure("ファイルサイズが大きすぎます")
    if content_type and not content_type.startswith("image/"):
        raise ValidationFailure("画像ファイルのみアップロードできます")

    bucket = _bucket()
    path = build_image_path(user_id, filename)
    blob = bucket.blob(path)
    try:
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()
    except (GoogleAPIError, FirebaseError) as e:
        logger.error("이미지 업로드 실패 path=%s: %s", path, e)
        raise TransportFailure("画像のアップロードに失敗しました") from e

    logger.info("이미지 업로드 user=%s path=%s", user_id, path)
    return blob.public_url


def delete_image(url: str) -> bool:
    """실패해도 예외를 올리지 않고 False (기록만 남김)"""
    path = path_from_url(url)
    if not path:
        logger.warning("삭제할 이미지 경로를 알 수 없음 url=%s", url)
        return False

    bucket = _bucket()
    try:
        bucket.blob(path).delete()
    except (GoogleAPIError, FirebaseError) as e:
        logger.error("이미지 삭제 실패 path=%s: %s", path, e)
        return False
    return True
