# logbook/main.py
import logging
import os
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from firebase_admin import credentials

import logbook.models  # noqa: F401  create_all 이 모든 테이블을 인식하도록
from logbook.config.settings import settings
from logbook.db import database
from logbook.errors import LogBookError, TransportFailure
from logbook.routers import auth, calendars, entries, exports, insights, letters, memos, reviews, uploads

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def init_firebase(key_path: str) -> bool:
    # 키 파일이 없으면 경고만 (서버는 뜨고 인증/이미지 기능만 제한됨)
    if not os.path.exists(key_path):
        logger.warning("'%s' 파일을 찾을 수 없습니다. 인증/이미지 업로드 기능이 제한됩니다.", key_path)
        return False

    # 이미 연결된 상태인지 확인 (재시작 시 에러 방지)
    if firebase_admin._apps:
        logger.info("Firebase가 이미 실행 중입니다.")
        return True

    options = {}
    if settings.firebase_storage_bucket:
        options["storageBucket"] = settings.firebase_storage_bucket
    firebase_admin.initialize_app(credentials.Certificate(key_path), options or None)
    logger.info("Firebase 초기화 완료")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    - 시작: Firebase Admin SDK + DB 엔진 초기화
    - 종료: DB 엔진 정리
    """
    init_firebase(settings.firebase_credentials_path)
    database.init_engine(settings.database_url)
    try:
        yield
    finally:
        database.dispose_engine()
        logger.info("DB 엔진 종료됨")


app = FastAPI(title="LogBook API", version=APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LogBookError)
async def logbook_error_handler(request: Request, exc: LogBookError):
    # 재시도 없음. 클라이언트는 토스트로 알리고 끝
    if isinstance(exc, TransportFailure):
        logger.error("%s %s 실패: %s", request.method, request.url.path, exc.__cause__ or exc)
    else:
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# 라우터 등록
app.include_router(auth.router)
app.include_router(entries.router)
app.include_router(memos.router)
app.include_router(letters.router)
app.include_router(reviews.router)
app.include_router(exports.router)
app.include_router(insights.router)
app.include_router(calendars.router)
app.include_router(uploads.router)


@app.get("/")
async def root():
    return {
        "message": "LogBook API が正常に動作しています",
        "version": APP_VERSION,
    }
