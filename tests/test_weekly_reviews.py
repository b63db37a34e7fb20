"""
Tests for logbook.services.weekly_reviews: one self-assessment per week.
"""
from __future__ import annotations

import datetime as dt

import pytest
from sqlalchemy.orm import sessionmaker

from conftest import USER_ID, fail_commit, miss_first_get
from logbook.errors import TransportFailure, ValidationFailure
from logbook.models.weekly_review import WeeklyReview
from logbook.schemas.schema_review import CreateWeeklyReview, PatchWeeklyReview
from logbook.services.weekly_reviews import (
    create_weekly_review,
    get_current_week_review,
    get_weekly_review_for_week,
    list_weekly_reviews_by_user,
    review_id_for,
    should_show_weekly_review_prompt,
    update_weekly_review,
    upsert_weekly_review,
    weekly_score_series,
)
from logbook.utils.dates import is_sunday, week_start_date

WEDNESDAY = dt.datetime(2025, 11, 5, 21, 15)   # 2025-11-05 (水)
SUNDAY = dt.datetime(2025, 11, 2)


def _review(stability=6, stimulation=4, task="早く寝る", memo=None):
    return CreateWeeklyReview(
        stability_score=stability,
        stimulation_score=stimulation,
        next_week_task=task,
        free_memo=memo,
    )


class TestWeekStart:
    def test_wednesday_maps_to_previous_sunday_midnight(self):
        assert week_start_date(WEDNESDAY) == SUNDAY

    def test_sunday_maps_to_itself(self):
        assert week_start_date(dt.datetime(2025, 11, 2, 18, 0)) == SUNDAY

    def test_saturday_maps_to_same_week(self):
        assert week_start_date(dt.date(2025, 11, 8)) == SUNDAY

    def test_is_sunday(self):
        assert is_sunday(SUNDAY)
        assert not is_sunday(WEDNESDAY)


class TestCreateReview:
    def test_created_on_wednesday_stores_sunday(self, db, user):
        row = create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)
        assert row.week_start_date == SUNDAY
        assert row.id == review_id_for(USER_ID, SUNDAY) == "user-1_20251102"
        assert row.free_memo == ""

    def test_second_create_in_same_week_is_rejected(self, db, user):
        create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)
        with pytest.raises(ValidationFailure):
            create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY + dt.timedelta(days=2))
        assert len(list_weekly_reviews_by_user(db, USER_ID)) == 1

    @pytest.mark.parametrize("score", [-1, 11])
    def test_out_of_range_scores_are_rejected(self, db, user, score):
        with pytest.raises(ValueError):
            _review(stability=score)
        data = CreateWeeklyReview.model_construct(
            stability_score=score, stimulation_score=5, next_week_task="x", free_memo=None
        )
        with pytest.raises(ValidationFailure):
            create_weekly_review(db, USER_ID, data, now=WEDNESDAY)


class TestLookupAndUpdate:
    def test_get_for_week_with_any_day_in_week(self, db, user):
        row = create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)
        assert get_weekly_review_for_week(db, USER_ID, dt.date(2025, 11, 8)).id == row.id
        assert get_weekly_review_for_week(db, USER_ID, dt.date(2025, 11, 9)) is None

    def test_current_week_and_prompt(self, db, user):
        assert should_show_weekly_review_prompt(db, USER_ID, now=WEDNESDAY)
        create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)
        assert get_current_week_review(db, USER_ID, now=WEDNESDAY) is not None
        assert not should_show_weekly_review_prompt(db, USER_ID, now=WEDNESDAY)
        # 다음 주에는 다시 프롬프트
        assert should_show_weekly_review_prompt(db, USER_ID, now=WEDNESDAY + dt.timedelta(days=7))

    def test_partial_update(self, db, user):
        row = create_weekly_review(db, USER_ID, _review(stability=3, memo="memo"), now=WEDNESDAY)
        later = WEDNESDAY + dt.timedelta(hours=1)

        updated = update_weekly_review(db, USER_ID, row.id, PatchWeeklyReview(stability_score=9), now=later)

        assert updated.stability_score == 9
        assert updated.stimulation_score == 4
        assert updated.free_memo == "memo"
        assert updated.updated_at == later

    def test_update_unknown(self, db, user):
        assert update_weekly_review(db, USER_ID, "nope", PatchWeeklyReview(stability_score=1)) is None

    def test_upsert_creates_then_overwrites(self, db, user):
        first = upsert_weekly_review(db, USER_ID, WEDNESDAY, _review(stability=2), now=WEDNESDAY)
        second = upsert_weekly_review(db, USER_ID, dt.date(2025, 11, 7), _review(stability=8), now=WEDNESDAY)

        assert first.id == second.id
        assert second.stability_score == 8
        assert len(list_weekly_reviews_by_user(db, USER_ID)) == 1

    def test_list_newest_week_first_and_series_oldest_first(self, db, user):
        for weeks_ago in (2, 0, 1):
            create_weekly_review(
                db, USER_ID, _review(stability=weeks_ago), now=WEDNESDAY - dt.timedelta(weeks=weeks_ago)
            )

        reviews = list_weekly_reviews_by_user(db, USER_ID)
        assert [r.stability_score for r in reviews] == [0, 1, 2]

        series = weekly_score_series(reviews)
        assert [p.week_label for p in series] == ["10/19", "10/26", "11/2"]
        assert [p.stability for p in series] == [2, 1, 0]


class TestCommitConflicts:
    def _stored(self, engine, stability):
        with sessionmaker(bind=engine)() as other:
            other.add(
                WeeklyReview(
                    id=review_id_for(USER_ID, SUNDAY),
                    user_id=USER_ID,
                    week_start_date=SUNDAY,
                    stability_score=stability,
                    stimulation_score=1,
                    next_week_task="先に保存",
                    free_memo="",
                    created_at=WEDNESDAY,
                    updated_at=WEDNESDAY,
                )
            )
            other.commit()

    def test_create_racing_another_create_is_rejected(self, db, engine, user, monkeypatch):
        self._stored(engine, 2)
        miss_first_get(monkeypatch, db)
        with pytest.raises(ValidationFailure):
            create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)

    def test_upsert_racing_another_create_overwrites_it(self, db, engine, user, monkeypatch):
        self._stored(engine, 2)
        miss_first_get(monkeypatch, db)

        row = upsert_weekly_review(db, USER_ID, WEDNESDAY, _review(stability=8), now=WEDNESDAY)

        assert row.stability_score == 8
        assert row.next_week_task == "早く寝る"
        monkeypatch.undo()
        assert len(list_weekly_reviews_by_user(db, USER_ID)) == 1

    def test_create_commit_error_is_transport_failure(self, db, user, monkeypatch):
        fail_commit(monkeypatch, db)
        with pytest.raises(TransportFailure):
            create_weekly_review(db, USER_ID, _review(), now=WEDNESDAY)
        monkeypatch.undo()
        assert list_weekly_reviews_by_user(db, USER_ID) == []

    def test_upsert_commit_error_is_transport_failure(self, db, user, monkeypatch):
        fail_commit(monkeypatch, db)
        with pytest.raises(TransportFailure):
            upsert_weekly_review(db, USER_ID, WEDNESDAY, _review(), now=WEDNESDAY)
