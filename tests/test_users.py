"""
Tests for logbook.services.users: first-request registration.
"""
from __future__ import annotations

import datetime as dt

import pytest
from sqlalchemy.orm import sessionmaker

from conftest import fail_commit, miss_first_get
from logbook.errors import TransportFailure
from logbook.models.users import User
from logbook.services.users import get_or_create_user

NOW = dt.datetime(2025, 11, 5, 9, 0)


class TestGetOrCreateUser:
    def test_new_uid_is_registered(self, db):
        user = get_or_create_user(db, "new-uid", display_name="Taro", is_anonymous=False, now=NOW)
        assert user.created_at == NOW
        assert db.get(User, "new-uid").display_name == "Taro"

    def test_existing_uid_is_returned(self, db, user):
        assert get_or_create_user(db, user.uid).uid == user.uid

    def test_display_name_is_refreshed(self, db, user):
        assert get_or_create_user(db, user.uid, display_name="renamed").display_name == "renamed"

    def test_concurrent_first_request_reuses_the_stored_user(self, db, engine, monkeypatch):
        with sessionmaker(bind=engine)() as other:
            other.add(User(uid="u-race", display_name="first", is_anonymous=True, created_at=NOW))
            other.commit()
        miss_first_get(monkeypatch, db)

        user = get_or_create_user(db, "u-race", now=NOW + dt.timedelta(seconds=1))

        assert user.display_name == "first"
        assert user.created_at == NOW

    def test_commit_error_is_transport_failure(self, db, monkeypatch):
        fail_commit(monkeypatch, db)
        with pytest.raises(TransportFailure):
            get_or_create_user(db, "broken", now=NOW)
        monkeypatch.undo()
        assert db.get(User, "broken") is None
