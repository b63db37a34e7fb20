# logbook/db/database.py
# 엔진/세션 수명은 main.py lifespan에서 init_engine / dispose_engine 으로 관리
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from logbook.errors import StoreUnavailable

logger = logging.getLogger(__name__)

Base = declarative_base()

engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker] = None


def init_engine(url: Optional[str]) -> Optional[Engine]:
    """
    DB 엔진 생성. url이 없으면 저장소 비활성 상태로 남는다.
    (get_db 호출 시 StoreUnavailable)
    """
    global engine, SessionLocal

    if not url:
        logger.warning("database_url이 설정되지 않았습니다. 저장소를 사용할 수 없습니다.")
        return None

    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        # 테스트/로컬용 sqlite (메모리 DB는 커넥션 하나를 공유)
        kwargs = {"connect_args": {"check_same_thread": False}}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
    else:
        engine = create_engine(
            url,
            pool_pre_ping=True,     # 끊긴 커넥션 자동 감지
            pool_recycle=1800,      # 30분마다 커넥션 새로고침
            pool_size=5,
            max_overflow=10,
        )

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("DB 엔진 초기화 완료 (%s)", parsed.get_backend_name())
    return engine


def dispose_engine() -> None:
    global engine, SessionLocal
    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal = None


# 의존성 주입을 위한 데이터베이스 세션 생성기
def get_db():
    if SessionLocal is None:
        raise StoreUnavailable("저장소가 초기화되지 않았습니다 (database_url 확인)")
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
