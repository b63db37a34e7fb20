# logbook/services/sekki.py
# 24절기(二十四節気). 화면 테마용이며 데이터 모델과는 무관
from __future__ import annotations

import datetime as dt
import math
from typing import Dict, List, Optional

from logbook.schemas.schema_calendar import SekkiInfo

_RAW: Dict[int, list] = {
    2025: [
        ("小寒", dt.datetime(2025, 1, 5, 11, 33), "winter", "寒さが最も厳しくなる前の時期。この日から寒の入りとなります。"),
        ("大寒", dt.datetime(2025, 1, 20, 5, 0), "winter", "一年で最も寒さが厳しい時期。寒稽古など、寒さを利用した行事が行われます。"),
        ("立春", dt.datetime(2025, 2, 3, 23, 10), "spring", "暦の上での春の始まり。梅の花が咲き始め、徐々に暖かくなり始めます。"),
        ("雨水", dt.datetime(2025, 2, 18, 19, 7), "spring", "雪が雨に変わり、積もった雪が溶け始める頃。農耕の準備を始める目安です。"),
        ("啓蟄", dt.datetime(2025, 3, 5, 17, 7), "spring", "冬ごもりしていた虫が、春の暖かさを感じて地中から姿を現す頃。"),
        ("春分", dt.datetime(2025, 3, 20, 18, 1), "spring", "昼と夜の長さがほぼ等しくなる日。自然をたたえ生物をいつくしむ日です。"),
        ("清明", dt.datetime(2025, 4, 4, 21, 49), "spring", "万物が清らかで明るく、生き生きとした様子を見せる頃。花見の季節です。"),
        ("穀雨", dt.datetime(2025, 4, 20, 4, 56), "spring", "春の雨が降り、穀物の成長を助ける頃。種まきの好機とされています。"),
        ("立夏", dt.datetime(2025, 5, 5, 14, 57), "summer", "暦の上での夏の始まり。新緑が美しく、過ごしやすい気候になります。"),
        ("小満", dt.datetime(2025, 5, 21, 3, 55), "summer", "陽気が良くなり、万物が成長して天地に満ち始める頃。麦の穂が実り始めます。"),
        ("芒種", dt.datetime(2025, 6, 5, 18, 57), "summer", "稲などの穀物の種をまく時期。梅雨入りの頃でもあります。"),
        ("夏至", dt.datetime(2025, 6, 21, 11, 42), "summer", "一年で最も昼が長く夜が短い日。本格的な夏の到来を告げます。"),
        ("小暑", dt.datetime(2025, 7, 7, 5, 5), "summer", "暑さが本格的になる頃。梅雨明けが近づき、蝉が鳴き始めます。"),
        ("大暑", dt.datetime(2025, 7, 22, 22, 29), "summer", "一年で最も暑さが厳しい時期。夏の土用の時期でもあります。"),
        ("立秋", dt.datetime(2025, 8, 7, 14, 52), "autumn", "暦の上での秋の始まり。まだ暑いですが、朝夕は涼しくなり始めます。"),
        ("処暑", dt.datetime(2025, 8, 23, 5, 34), "autumn", "暑さが和らぐ頃。朝晩の涼しさに秋の気配を感じ始めます。"),
        ("白露", dt.datetime(2025, 9, 7, 17, 52), "autumn", "草花に朝露が宿り始める頃。日中は暖かくても朝晩は冷え込みます。"),
        ("秋分", dt.datetime(2025, 9, 23, 3, 19), "autumn", "昼と夜の長さがほぼ等しくなる日。秋彼岸の中日でもあります。"),
        ("寒露", dt.datetime(2025, 10, 8, 9, 41), "autumn", "露が冷たく感じられる頃。秋が深まり、紅葉が美しくなります。"),
        ("霜降", dt.datetime(2025, 10, 23, 12, 51), "autumn", "露が霜に変わり始める頃。朝晩の冷え込みが厳しくなります。"),
        ("立冬", dt.datetime(2025, 11, 7, 13, 4), "winter", "暦の上での冬の始まり。日差しが弱まり、冬の気配を感じ始めます。"),
        ("小雪", dt.datetime(2025, 11, 22, 10, 36), "winter", "雪が降り始める頃。まだ積もるほどではない、わずかな雪を指します。"),
        ("大雪", dt.datetime(2025, 12, 7, 6, 5), "winter", "本格的に雪が降り始める頃。山々は雪に覆われ、平地でも雪が降ります。"),
        ("冬至", dt.datetime(2025, 12, 22, 0, 3), "winter", "一年で最も昼が短く夜が長い日。ゆず湯に入り、かぼちゃを食べる風習があります。"),
    ],
    2026: [
        ("小寒", dt.datetime(2026, 1, 5, 17, 24), "winter", "寒さが最も厳しくなる前の時期。この日から寒の入りとなります。"),
        ("大寒", dt.datetime(2026, 1, 20, 10, 46), "winter", "一年で最も寒さが厳しい時期。寒稽古など、寒さを利用した行事が行われます。"),
        ("立春", dt.datetime(2026, 2, 4, 5, 3), "spring", "暦の上での春の始まり。梅の花が咲き始め、徐々に暖かくなり始めます。"),
        ("雨水", dt.datetime(2026, 2, 19, 0, 51), "spring", "雪が雨に変わり、積もった雪が溶け始める頃。農耕の準備を始める目安です。"),
        ("啓蟄", dt.datetime(2026, 3, 5, 22, 58), "spring", "冬ごもりしていた虫が、春の暖かさを感じて地中から姿を現す頃。"),
        ("春分", dt.datetime(2026, 3, 20, 23, 41), "spring", "昼と夜の長さがほぼ等しくなる日。自然をたたえ生物をいつくしむ日です。"),
        ("清明", dt.datetime(2026, 4, 5, 3, 35), "spring", "万物が清らかで明るく、生き生きとした様子を見せる頃。花見の季節です。"),
        ("穀雨", dt.datetime(2026, 4, 20, 10, 31), "spring", "春の雨が降り、穀物の成長を助ける頃。種まきの好機とされています。"),
        ("立夏", dt.datetime(2026, 5, 5, 20, 41), "summer", "暦の上での夏の始まり。新緑が美しく、過ごしやすい気候になります。"),
        ("小満", dt.datetime(2026, 5, 21, 9, 28), "summer", "陽気が良くなり、万物が成長して天地に満ち始める頃。麦の穂が実り始めます。"),
        ("芒種", dt.datetime(2026, 6, 6, 0, 40), "summer", "稲などの穀物の種をまく時期。梅雨入りの頃でもあります。"),
        ("夏至", dt.datetime(2026, 6, 21, 17, 16), "summer", "一年で最も昼が長く夜が短い日。本格的な夏の到来を告げます。"),
        ("小暑", dt.datetime(2026, 7, 7, 10, 50), "summer", "暑さが本格的になる頃。梅雨明けが近づき、蝉が鳴き始めます。"),
        ("大暑", dt.datetime(2026, 7, 23, 4, 7), "summer", "一年で最も暑さが厳しい時期。夏の土用の時期でもあります。"),
        ("立秋", dt.datetime(2026, 8, 7, 20, 38), "autumn", "暦の上での秋の始まり。まだ暑いですが、朝夕は涼しくなり始めます。"),
        ("処暑", dt.datetime(2026, 8, 23, 11, 16), "autumn", "暑さが和らぐ頃。朝晩の涼しさに秋の気配を感じ始めます。"),
        ("白露", dt.datetime(2026, 9, 7, 23, 41), "autumn", "草花に朝露が宿り始める頃。日中は暖かくても朝晩は冷え込みます。"),
        ("秋分", dt.datetime(2026, 9, 23, 9, 4), "autumn", "昼と夜の長さがほぼ等しくなる日。秋彼岸の中日でもあります。"),
        ("寒露", dt.datetime(2026, 10, 8, 15, 31), "autumn", "露が冷たく感じられる頃。秋が深まり、紅葉が美しくなります。"),
        ("霜降", dt.datetime(2026, 10, 23, 18, 38), "autumn", "露が霜に変わり始める頃。朝晩の冷え込みが厳しくなります。"),
        ("立冬", dt.datetime(2026, 11, 7, 18, 54), "winter", "暦の上での冬の始まり。日差しが弱まり、冬の気配を感じ始めます。"),
        ("小雪", dt.datetime(2026, 11, 22, 16, 24), "winter", "雪が降り始める頃。まだ積もるほどではない、わずかな雪を指します。"),
        ("大雪", dt.datetime(2026, 12, 7, 11, 55), "winter", "本格的に雪が降り始める頃。山々は雪に覆われ、平地でも雪が降ります。"),
        ("冬至", dt.datetime(2026, 12, 22, 5, 53), "winter", "一年で最も昼が短く夜が長い日。ゆず湯に入り、かぼちゃを食べる風習があります。"),
    ],
}

SEKKI_DATA: Dict[int, List[SekkiInfo]] = {
    year: [
        SekkiInfo(name=name, date=date, season=season, description=description)
        for name, date, season, description in rows
    ]
    for year, rows in _RAW.items()
}


def get_current_sekki(value: dt.datetime) -> Optional[SekkiInfo]:
    """value 이전(포함) 중 가장 가까운 절기. 그 해 첫 절기 전이면 전년도 마지막 절기."""
    year_data = SEKKI_DATA.get(value.year)
    if not year_data:
        return None

    for sekki in sorted(year_data, key=lambda s: s.date, reverse=True):
        if value >= sekki.date:
            return sekki

    prev_year = SEKKI_DATA.get(value.year - 1)
    if prev_year:
        return prev_year[-1]
    return None


def get_next_sekki(value: dt.datetime) -> Optional[SekkiInfo]:
    year_data = SEKKI_DATA.get(value.year)
    if not year_data:
        return None

    for sekki in year_data:
        if value < sekki.date:
            return sekki

    next_year = SEKKI_DATA.get(value.year + 1)
    if next_year:
        return next_year[0]
    return None


def get_days_until_next_sekki(value: dt.datetime) -> Optional[int]:
    nxt = get_next_sekki(value)
    if nxt is None:
        return None
    return math.ceil((nxt.date - value).total_seconds() / 86400)


def get_sekki_class_name(name: str) -> str:
    return f"bg-{name}"
