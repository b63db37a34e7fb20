# logbook/constants/entry.py
from typing import Dict, Optional

MOOD_SCALE = (
    {"value": 1, "label": "とても低い", "emoji": "😞"},
    {"value": 2, "label": "やや低い", "emoji": "🙁"},
    {"value": 3, "label": "ふつう", "emoji": "😐"},
    {"value": 4, "label": "やや高い", "emoji": "🙂"},
    {"value": 5, "label": "とても高い", "emoji": "😄"},
)

MOOD_MIN = 1
MOOD_MAX = 5

MOOD_LABEL_MAP: Dict[int, str] = {m["value"]: m["label"] for m in MOOD_SCALE}
MOOD_EMOJI_MAP: Dict[int, str] = {m["value"]: m["emoji"] for m in MOOD_SCALE}

DEFAULT_MOOD_LABEL = "未記録"
DEFAULT_MOOD_EMOJI = "・"


def mood_label(value: Optional[float]) -> str:
    # 평균값(3.4 등)은 반올림해서 라벨을 찾는다
    if value is None:
        return DEFAULT_MOOD_LABEL
    return MOOD_LABEL_MAP.get(int(round(value)), DEFAULT_MOOD_LABEL)


def mood_emoji(value: Optional[float]) -> str:
    if value is None:
        return DEFAULT_MOOD_EMOJI
    return MOOD_EMOJI_MAP.get(int(round(value)), DEFAULT_MOOD_EMOJI)
