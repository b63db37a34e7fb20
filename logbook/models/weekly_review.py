# logbook/models/weekly_review.py
from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, ForeignKey, SmallInteger, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logbook.db.database import Base


class WeeklyReview(Base):
    __tablename__ = "weeklyReviews"
    __table_args__ = (
        # 유저당 한 주에 하나
        UniqueConstraint("userId", "weekStartDate", name="uq_weekly_reviews_user_week"),
    )

    # "<userId>_<yyyyMMdd>" 결정적 키
    id: Mapped[str] = mapped_column(String(160), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # 해당 주 일요일 00:00 (로컬)
    week_start_date: Mapped[dt.datetime] = mapped_column("weekStartDate", DateTime, nullable=False)

    stability_score: Mapped[int] = mapped_column("stabilityScore", SmallInteger, nullable=False)
    stimulation_score: Mapped[int] = mapped_column("stimulationScore", SmallInteger, nullable=False)

    next_week_task: Mapped[str] = mapped_column("nextWeekTask", Text, nullable=False)
    free_memo: Mapped[str] = mapped_column("freeMemo", Text, nullable=False, default="")

    created_at: Mapped[dt.datetime] = mapped_column("createdAt", DateTime, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column("updatedAt", DateTime, nullable=False)

    user = relationship("User", back_populates="weekly_reviews", uselist=False)
