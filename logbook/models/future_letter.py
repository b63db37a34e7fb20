# logbook/models/future_letter.py
from __future__ import annotations

import datetime as dt
import enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum as SqlEnum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logbook.db.database import Base


class LetterPeriod(str, enum.Enum):
    short = "short"
    medium = "medium"
    long = "long"
    custom = "custom"


class FutureLetter(Base):
    __tablename__ = "futureLetters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    period: Mapped[LetterPeriod] = mapped_column(
        SqlEnum(LetterPeriod, name="letter_period"),
        nullable=False,
    )

    # 생성 시 한 번만 계산, 이후 변경 없음
    delivery_date: Mapped[dt.datetime] = mapped_column("deliveryDate", DateTime, nullable=False)

    is_opened: Mapped[bool] = mapped_column("isOpened", Boolean, nullable=False, default=False)
    opened_at: Mapped[Optional[dt.datetime]] = mapped_column("openedAt", DateTime, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)

    __table_args__ = (
        Index("idx_letters_user_delivery", "userId", "deliveryDate"),
    )

    user = relationship("User", back_populates="future_letters", uselist=False)
