# logbook/services/entries.py
from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from logbook.errors import ValidationFailure, commit_or_fail, require_store
from logbook.models.entry import Entry
from logbook.schemas.schema_entry import CreateEntry, PatchEntry
from logbook.utils.dates import resolve_now, to_local_naive

logger = logging.getLogger(__name__)

# null 로 초기화할 때 쓰는 기본값
_EMPTY_VALUES = {
    "title": "",
    "tags": [],
    "conditions": [],
    "weather": "",
    "mood": None,
    "image_url": "",
}


def _clean_list(values: Optional[Iterable[str]]) -> List[str]:
    if not values:
        return []
    return [v.strip() for v in values if v and v.strip()]


def create_entry(
    db: Session,
    user_id: str,
    data: CreateEntry,
    *,
    now: Optional[dt.datetime] = None,
) -> Entry:
    require_store(db)
    if not data.content or not data.content.strip():
        raise ValidationFailure("content は必須です")

    now = resolve_now(now)
    row = Entry(
        id=uuid.uuid4().hex,
        user_id=user_id,
        title=data.title or "",
        content=data.content,
        tags=_clean_list(data.tags),
        conditions=_clean_list(data.conditions),
        weather=data.weather or "",
        mood=data.mood,
        image_url=data.image_url or "",
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    commit_or_fail(db, "entry 생성")
    logger.info("entry 생성 id=%s user=%s", row.id, user_id)
    return row


def get_entry(db: Session, user_id: str, entry_id: str) -> Optional[Entry]:
    require_store(db)
    return (
        db.execute(
            select(Entry).where(Entry.id == entry_id, Entry.user_id == user_id)
        )
        .scalars()
        .first()
    )


def update_entry(
    db: Session,
    user_id: str,
    entry_id: str,
    patch: PatchEntry,
    *,
    now: Optional[dt.datetime] = None,
) -> Optional[Entry]:
    """
    patch 에 실제로 들어온 필드만 덮어쓰고 updatedAt 은 항상 갱신.
    """
    require_store(db)
    row = get_entry(db, user_id, entry_id)
    if not row:
        return None

    changes = patch.model_dump(exclude_unset=True)
    if "content" in changes:
        content = changes["content"]
        if content is None or not content.strip():
            raise ValidationFailure("content は空にできません")

    for field, value in changes.items():
        if value is None:
            value = _EMPTY_VALUES.get(field)
            if isinstance(value, list):
                value = []
        elif field in ("tags", "conditions"):
            value = _clean_list(value)
        setattr(row, field, value)

    row.updated_at = resolve_now(now)
    commit_or_fail(db, "entry 수정")
    logger.info("entry 수정 id=%s fields=%s", entry_id, sorted(changes))
    return row


def delete_entry(db: Session, user_id: str, entry_id: str) -> bool:
    require_store(db)
    row = get_entry(db, user_id, entry_id)
    if not row:
        return False
    db.delete(row)
    commit_or_fail(db, "entry 삭제")
    logger.info("entry 삭제 id=%s user=%s", entry_id, user_id)
    return True


def list_entries_by_user(db: Session, user_id: str) -> List[Entry]:
    """최신순"""
    require_store(db)
    stmt = (
        select(Entry)
        .where(Entry.user_id == user_id)
        .order_by(Entry.created_at.desc(), Entry.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def list_entries_by_date_range(
    db: Session,
    user_id: str,
    start: dt.datetime,
    end: dt.datetime,
) -> List[Entry]:
    """start <= createdAt <= end (양끝 포함), 최신순"""
    require_store(db)
    start = to_local_naive(start)
    end = to_local_naive(end)
    if start > end:
        raise ValidationFailure("start は end 以前である必要があります")

    stmt = (
        select(Entry)
        .where(
            Entry.user_id == user_id,
            Entry.created_at >= start,
            Entry.created_at <= end,
        )
        .order_by(Entry.created_at.desc(), Entry.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def entry_matches_search_term(entry: Entry, term: Optional[str]) -> bool:
    """
    content / title / weather / tags / conditions 중 하나에
    term 이 (대소문자 무시) 포함되는지. 빈 검색어는 항상 True.
    """
    if term is None or not term.strip():
        return True
    needle = term.casefold()
    fields = [
        entry.content or "",
        entry.title or "",
        entry.weather or "",
        *(entry.tags or []),
        *(entry.conditions or []),
    ]
    return any(needle in f.casefold() for f in fields)


def search_entries(db: Session, user_id: str, term: Optional[str]) -> List[Entry]:
    return [e for e in list_entries_by_user(db, user_id) if entry_matches_search_term(e, term)]
