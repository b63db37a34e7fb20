"""
Tests for logbook.services.timeline: month calendar and multi-year timeline.
"""
from __future__ import annotations

import datetime as dt

import pytest

from conftest import make_entry
from logbook.errors import ValidationFailure
from logbook.services.timeline import (
    SNIPPET_LENGTH,
    build_month_calendar,
    build_snippet,
    build_timeline,
    filter_entries_by_day,
    group_entries_by_day,
)

TODAY = dt.date(2025, 3, 15)


class TestSnippet:
    def test_short_content_is_unchanged(self):
        assert build_snippet("短い") == "短い"

    def test_long_content_is_cut(self):
        snippet = build_snippet("あ" * 100)
        assert snippet == "あ" * SNIPPET_LENGTH + "..."


class TestGrouping:
    def test_group_by_local_day_in_time_order(self):
        late = make_entry(dt.datetime(2025, 3, 1, 22, 0), "late")
        early = make_entry(dt.datetime(2025, 3, 1, 6, 0), "early")
        other = make_entry(dt.datetime(2025, 3, 2, 0, 0), "other")

        groups = group_entries_by_day([late, other, early])

        assert list(groups) == [dt.date(2025, 3, 1), dt.date(2025, 3, 2)]
        assert [e.content for e in groups[dt.date(2025, 3, 1)]] == ["early", "late"]

    def test_filter_by_day(self):
        a = make_entry(dt.datetime(2025, 3, 1, 23, 59))
        b = make_entry(dt.datetime(2025, 3, 2, 0, 0))
        assert filter_entries_by_day([a, b], dt.date(2025, 3, 1)) == [a]


class TestTimeline:
    def test_three_year_range_covers_every_month(self):
        entries = [
            make_entry(dt.datetime(2022, 12, 31, 10, 0)),   # 범위 밖
            make_entry(dt.datetime(2023, 1, 10, 9, 0), mood=5, title="t"),
            make_entry(dt.datetime(2025, 3, 14, 9, 0)),
            make_entry(dt.datetime(2025, 3, 14, 8, 0)),
        ]

        timeline = build_timeline(entries, 3, TODAY)

        assert timeline.years == [2023, 2024, 2025]
        assert len(timeline.months) == 12 + 12 + 3
        first = timeline.months[0]
        assert (first.year, first.month, first.entry_count) == (2023, 1, 1)
        assert first.days[0].entries[0].mood_emoji == "😄"
        assert first.days[0].entries[0].time == "09:00"
        last = timeline.months[-1]
        assert (last.year, last.month, last.entry_count) == (2025, 3, 2)
        assert [e.time for e in last.days[0].entries] == ["08:00", "09:00"]
        assert timeline.months[5].days == []

    def test_invalid_range(self):
        with pytest.raises(ValidationFailure):
            build_timeline([], 2, TODAY)


class TestMonthCalendar:
    def test_weeks_start_on_sunday(self):
        entries = [
            make_entry(dt.datetime(2025, 11, 5, 9, 0)),
            make_entry(dt.datetime(2025, 11, 5, 21, 0)),
        ]

        cal = build_month_calendar(2025, 11, entries, dt.date(2025, 11, 5))

        assert len(cal.weeks) == 6
        first = cal.weeks[0][0]
        assert first.date == dt.date(2025, 10, 26)
        assert first.in_month is False
        assert all(len(week) == 7 for week in cal.weeks)
        assert all(week[0].date.weekday() == 6 for week in cal.weeks)

        nov5 = next(d for w in cal.weeks for d in w if d.date == dt.date(2025, 11, 5))
        assert nov5.entry_count == 2
        assert nov5.is_today

    def test_invalid_month(self):
        with pytest.raises(ValidationFailure):
            build_month_calendar(2025, 13, [], TODAY)
