"""
Tests for logbook.services.insights: daily / weekly / monthly summaries.
"""
from __future__ import annotations

import datetime as dt

import pytest

from conftest import make_entry
from logbook.constants.entry import DEFAULT_MOOD_EMOJI, DEFAULT_MOOD_LABEL, mood_emoji, mood_label
from logbook.services.insights import (
    average_mood,
    build_insights,
    build_mood_trend,
    collect_top_items,
    create_summary,
    round_half_up,
)

REF = dt.datetime(2025, 11, 5, 20, 0)   # 水曜日


class TestRounding:
    @pytest.mark.parametrize(
        "value,digits,expected",
        [(2.25, 1, 2.3), (2.35, 1, 2.4), (1.005, 2, 1.01), (1.666666, 2, 1.67)],
    )
    def test_half_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_average_mood(self):
        entries = [make_entry(REF, mood=m) for m in (2, 3, 3)] + [make_entry(REF)]
        assert average_mood(entries) == 2.7

    def test_average_without_moods(self):
        assert average_mood([make_entry(REF)]) is None


class TestTopItems:
    def test_frequency_then_label(self):
        items = collect_top_items(["b", "a", " a ", "c", "b", "", None, "  "])
        assert [(i.label, i.count) for i in items] == [("a", 2), ("b", 2), ("c", 1)]

    def test_ties_use_locale_order(self):
        items = collect_top_items(["Banana", "apple", "cherry"])
        assert [i.label for i in items] == ["apple", "Banana", "cherry"]

    def test_kana_ties_use_gojuon_order(self):
        items = collect_top_items(["さくら", "カメラ", "あめ"])
        assert [i.label for i in items] == ["あめ", "カメラ", "さくら"]

    def test_limit(self):
        assert len(collect_top_items(list("abcdefg"), 5)) == 5

    def test_summary_limits(self):
        entries = [
            make_entry(REF, tags=list("abcdefg"), weather=w)
            for w in ("晴れ", "雨", "曇り", "雪")
        ]
        summary = create_summary("今日", entries)
        assert summary.entry_count == 4
        assert len(summary.top_tags) == 5
        assert len(summary.top_weather) == 3
        assert summary.average_mood is None


class TestMoodTrend:
    def test_seven_day_trend_oldest_first(self):
        entries = [
            make_entry(dt.datetime(2025, 11, 5, 8, 0), mood=1),
            make_entry(dt.datetime(2025, 11, 5, 12, 0), mood=2),
            make_entry(dt.datetime(2025, 11, 5, 18, 0), mood=2),
            make_entry(dt.datetime(2025, 10, 30, 9, 0), mood=5),
            make_entry(dt.datetime(2025, 10, 20, 9, 0), mood=5),   # 범위 밖
        ]

        trend = build_mood_trend(entries, REF, 7)

        assert len(trend) == 7
        assert trend[0].date == dt.date(2025, 10, 30)
        assert trend[0].label == "10/30"
        assert trend[0].average_mood == 5
        assert trend[-1].date == dt.date(2025, 11, 5)
        assert trend[-1].average_mood == 1.67
        assert all(p.average_mood is None for p in trend[1:-1])

    def test_zero_days(self):
        assert build_mood_trend([], REF, 0) == []


class TestBuildInsights:
    def test_periods(self):
        entries = [
            make_entry(dt.datetime(2025, 11, 5, 7, 0), mood=4, tags=["work"]),   # 今日
            make_entry(dt.datetime(2025, 11, 2, 7, 0), mood=2),                  # 今週 (日曜)
            make_entry(dt.datetime(2025, 11, 1, 7, 0), mood=3),                  # 今月 (先週の土曜)
            make_entry(dt.datetime(2025, 10, 31, 7, 0), mood=1),                 # 先月
        ]

        result = build_insights(entries, REF, 30)

        assert result.daily.title == "今日"
        assert result.daily.entry_count == 1
        assert result.daily.top_tags[0].label == "work"
        assert result.weekly.entry_count == 2
        assert result.weekly.average_mood == 3.0
        assert result.monthly.entry_count == 3
        assert result.trend_period == 30
        assert len(result.mood_trend) == 30


class TestMoodLabels:
    def test_labels_round_the_value(self):
        assert mood_label(3) == "ふつう"
        assert mood_label(3.6) == "やや高い"
        assert mood_emoji(1) == "😞"

    def test_unknown_values_fall_back(self):
        assert mood_label(None) == DEFAULT_MOOD_LABEL
        assert mood_label(9) == DEFAULT_MOOD_LABEL
        assert mood_emoji(None) == DEFAULT_MOOD_EMOJI
