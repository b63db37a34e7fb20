# logbook/models/entry_export.py
from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from logbook.db.database import Base


class EntryExport(Base):
    """기간 지정 CSV 내보내기 기록"""

    __tablename__ = "entryExports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    range_start: Mapped[dt.datetime] = mapped_column("rangeStart", DateTime, nullable=False)
    range_end: Mapped[dt.datetime] = mapped_column("rangeEnd", DateTime, nullable=False)

    filename: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)
