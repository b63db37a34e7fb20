"""
Tests for logbook.services.memos: quick memo store.
"""
from __future__ import annotations

import datetime as dt

import pytest

from conftest import USER_ID
from logbook.errors import StoreUnavailable, ValidationFailure
from logbook.schemas.schema_memo import CreateMemo
from logbook.services.memos import (
    create_memo,
    delete_memo,
    list_memos_by_user,
    list_today_memos,
)

NOW = dt.datetime(2025, 11, 5, 15, 0)


class TestCreateMemo:
    def test_long_content_is_truncated_to_140(self, db, user):
        row = create_memo(db, USER_ID, CreateMemo(content="あ" * 200), now=NOW)
        assert len(row.content) == 140

        db.expire_all()
        stored = list_memos_by_user(db, USER_ID)[0]
        assert len(stored.content) == 140

    def test_image_only_memo_is_allowed(self, db, user):
        row = create_memo(db, USER_ID, CreateMemo(content="", image_url="https://example.com/a.png"), now=NOW)
        assert row.image_url == "https://example.com/a.png"

    def test_empty_memo_is_rejected(self, db, user):
        with pytest.raises(ValidationFailure):
            create_memo(db, USER_ID, CreateMemo(content="  "))

    def test_missing_store_handle(self):
        with pytest.raises(StoreUnavailable):
            create_memo(None, USER_ID, CreateMemo(content="x"))


class TestListMemos:
    def test_newest_first_and_capped(self, db, user):
        for i in range(5):
            create_memo(db, USER_ID, CreateMemo(content=f"m{i}"), now=NOW + dt.timedelta(minutes=i))

        memos = list_memos_by_user(db, USER_ID, 3)

        assert [m.content for m in memos] == ["m4", "m3", "m2"]

    def test_today_window_is_half_open(self, db, user):
        midnight = dt.datetime(2025, 11, 5)
        create_memo(db, USER_ID, CreateMemo(content="yesterday"), now=midnight - dt.timedelta(seconds=1))
        create_memo(db, USER_ID, CreateMemo(content="midnight"), now=midnight)
        create_memo(db, USER_ID, CreateMemo(content="evening"), now=dt.datetime(2025, 11, 5, 23, 59, 59))
        create_memo(db, USER_ID, CreateMemo(content="tomorrow"), now=midnight + dt.timedelta(days=1))

        today = list_today_memos(db, USER_ID, now=NOW)

        assert [m.content for m in today] == ["evening", "midnight"]

    def test_delete(self, db, user):
        row = create_memo(db, USER_ID, CreateMemo(content="x"), now=NOW)
        assert delete_memo(db, USER_ID, row.id)
        assert list_memos_by_user(db, USER_ID) == []
        assert not delete_memo(db, USER_ID, row.id)
