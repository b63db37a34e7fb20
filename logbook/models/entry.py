# logbook/models/entry.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logbook.db.database import Base


class Entry(Base):
    __tablename__ = "entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False)

    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    conditions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    weather: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    # 1~5, 없으면 NULL
    mood: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)

    image_url: Mapped[str] = mapped_column("imageUrl", String(1024), nullable=False, default="")

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column("updatedAt", DateTime, nullable=False)

    __table_args__ = (
        Index("idx_entries_user_created", "userId", "createdAt"),
    )

    user = relationship("User", back_populates="entries", uselist=False)
