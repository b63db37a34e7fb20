from __future__ import annotations

import datetime as dt
import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import logbook.models  # noqa: F401
from logbook.auth.dependencies import get_current_user
from logbook.db.database import Base, get_db
from logbook.main import app
from logbook.models.entry import Entry
from logbook.models.memo import Memo
from logbook.models.users import User

USER_ID = "user-1"
OTHER_USER_ID = "user-2"

_ids = itertools.count(1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    row = User(uid=USER_ID, display_name="tester", is_anonymous=True, created_at=dt.datetime(2025, 1, 1))
    other = User(uid=OTHER_USER_ID, display_name=None, is_anonymous=True, created_at=dt.datetime(2025, 1, 1))
    db.add_all([row, other])
    db.commit()
    return row


@pytest.fixture
def client(engine, user):
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestSession()
        try:
            yield session
        finally:
            session.close()

    def override_current_user():
        return User(uid=USER_ID, display_name="tester", is_anonymous=True, created_at=dt.datetime(2025, 1, 1))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_current_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_entry(
    created_at: dt.datetime,
    content: str = "本文",
    *,
    title: str = "",
    tags=None,
    conditions=None,
    weather: str = "",
    mood=None,
    image_url: str = "",
) -> Entry:
    """DB에 넣지 않는 순수 함수 테스트용"""
    return Entry(
        id=f"e{next(_ids)}",
        user_id=USER_ID,
        title=title,
        content=content,
        tags=list(tags or []),
        conditions=list(conditions or []),
        weather=weather,
        mood=mood,
        image_url=image_url,
        created_at=created_at,
        updated_at=created_at,
    )


def make_memo(created_at: dt.datetime, content: str = "メモ", image_url: str = "") -> Memo:
    return Memo(
        id=f"m{next(_ids)}",
        user_id=USER_ID,
        content=content,
        image_url=image_url,
        created_at=created_at,
    )


def miss_first_get(monkeypatch, session):
    """첫 번째 session.get 만 None: 조회 직후 다른 요청이 먼저 insert 한 상황"""
    real_get = session.get
    calls = []

    def get(entity, ident, **kwargs):
        calls.append(ident)
        if len(calls) == 1:
            return None
        return real_get(entity, ident, **kwargs)

    monkeypatch.setattr(session, "get", get)


def fail_commit(monkeypatch, session):
    def commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(session, "commit", commit)
