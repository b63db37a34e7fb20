# logbook/models/users.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logbook.db.database import Base

if TYPE_CHECKING:
    from logbook.models.entry import Entry
    from logbook.models.memo import Memo
    from logbook.models.future_letter import FutureLetter
    from logbook.models.weekly_review import WeeklyReview


class User(Base):
    __tablename__ = "users"

    # Firebase Auth uid (익명 로그인도 uid 발급됨)
    uid: Mapped[str] = mapped_column(String(128), primary_key=True)

    display_name: Mapped[Optional[str]] = mapped_column("displayName", String(120), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column("isAnonymous", default=True, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)

    entries: Mapped[List["Entry"]] = relationship(
        "Entry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    memos: Mapped[List["Memo"]] = relationship(
        "Memo",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    future_letters: Mapped[List["FutureLetter"]] = relationship(
        "FutureLetter",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    weekly_reviews: Mapped[List["WeeklyReview"]] = relationship(
        "WeeklyReview",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
