# logbook/models/memo.py
from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logbook.db.database import Base


class Memo(Base):
    __tablename__ = "memos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False,
    )

    # 140자 제한은 서비스에서 잘라서 저장
    content: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    image_url: Mapped[str] = mapped_column("imageUrl", String(1024), nullable=False, default="")

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)

    __table_args__ = (
        Index("idx_memos_user_created", "userId", "createdAt"),
    )

    user = relationship("User", back_populates="memos", uselist=False)
