# logbook/services/export.py
# 텍스트(클립보드) / CSV 내보내기. 입력 순서를 그대로 유지하므로 정렬은 호출 측에서.
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from logbook.constants.entry import mood_label
from logbook.models.entry import Entry
from logbook.models.memo import Memo

TEXT_SEPARATOR = "\n\n---\n\n"

ENTRY_CSV_HEADERS = ["日時", "タイトル", "本文", "タグ", "天気", "気分スコア"]
MEMO_CSV_HEADERS = ["日時", "内容", "画像URL"]
UNIFIED_CSV_HEADERS = ["日時", "種別", "タイトル", "本文", "タグ", "天気", "気分スコア", "画像URL"]

KIND_ENTRY = "entry"
KIND_MEMO = "memo"
_KIND_LABELS = {KIND_ENTRY: "日記", KIND_MEMO: "メモ"}


@dataclass
class UnifiedItem:
    kind: str
    data: Union[Entry, Memo]

    @property
    def created_at(self) -> dt.datetime:
        return self.data.created_at


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _timestamp(value: dt.datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _mood_cell(mood: Optional[int]) -> str:
    return "" if mood is None else str(mood)


def _entry_meta_line(entry: Entry) -> str:
    parts = []
    if entry.mood is not None:
        parts.append(f"気分: {entry.mood} ({mood_label(entry.mood)})")
    if entry.weather:
        parts.append(f"天気: {entry.weather}")
    return " / ".join(parts)


def entries_to_text(entries: Sequence[Entry]) -> str:
    blocks = []
    for entry in entries:
        title = f"【{entry.title}】" if entry.title else ""
        lines = [f"{entry.created_at:%H:%M} {title}".rstrip(), entry.content]
        meta = _entry_meta_line(entry)
        if meta:
            lines.append(meta)
        blocks.append("\n".join(lines))
    return TEXT_SEPARATOR.join(blocks)


def entries_to_csv(entries: Sequence[Entry]) -> str:
    """본문 컬럼만 큰따옴표로 감싸고 내부 " 는 "" 로"""
    rows = [",".join(ENTRY_CSV_HEADERS)]
    for entry in entries:
        rows.append(
            ",".join(
                [
                    _timestamp(entry.created_at),
                    entry.title or "",
                    _quote(entry.content),
                    ";".join(entry.tags or []),
                    entry.weather or "",
                    _mood_cell(entry.mood),
                ]
            )
        )
    return "\n".join(rows)


def memos_to_text(memos: Sequence[Memo]) -> str:
    blocks = []
    for memo in memos:
        lines = [f"{memo.created_at:%H:%M}", memo.content]
        if memo.image_url:
            lines.append(f"画像: {memo.image_url}")
        blocks.append("\n".join(lines))
    return TEXT_SEPARATOR.join(blocks)


def memos_to_csv(memos: Sequence[Memo]) -> str:
    rows = [",".join(MEMO_CSV_HEADERS)]
    for memo in memos:
        rows.append(
            ",".join([_timestamp(memo.created_at), _quote(memo.content), memo.image_url or ""])
        )
    return "\n".join(rows)


def build_unified_items(entries: Sequence[Entry], memos: Sequence[Memo]) -> List[UnifiedItem]:
    """일기 + 메모를 최신순으로 합친다"""
    items = [UnifiedItem(KIND_ENTRY, e) for e in entries]
    items += [UnifiedItem(KIND_MEMO, m) for m in memos]
    items.sort(key=lambda item: item.created_at, reverse=True)
    return items


def unified_to_csv(items: Sequence[UnifiedItem]) -> str:
    rows = [",".join(UNIFIED_CSV_HEADERS)]
    for item in items:
        data = item.data
        if item.kind == KIND_ENTRY:
            cells = [
                data.title or "",
                _quote(data.content),
                ";".join(data.tags or []),
                data.weather or "",
                _mood_cell(data.mood),
                data.image_url or "",
            ]
        else:
            cells = ["", _quote(data.content), "", "", "", data.image_url or ""]
        rows.append(",".join([_timestamp(item.created_at), _KIND_LABELS[item.kind], *cells]))
    return "\n".join(rows)


def range_export_filename(start: dt.date | dt.datetime, end: dt.date | dt.datetime) -> str:
    return f"logbook_{start:%Y%m%d}_{end:%Y%m%d}.csv"


def unified_export_filename(today: dt.date | dt.datetime) -> str:
    return f"logbook_{today:%Y%m%d}.csv"
