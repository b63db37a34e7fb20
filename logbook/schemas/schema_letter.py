# logbook/schemas/schema_letter.py
import datetime as dt
from typing import Optional

from pydantic import Field, model_validator

from logbook.models.future_letter import LetterPeriod
from logbook.schemas.schema_base import CamelModel


class CreateFutureLetter(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    period: LetterPeriod
    custom_date: Optional[dt.date] = None

    @model_validator(mode="after")
    def custom_requires_date(self):
        if self.period == LetterPeriod.custom and self.custom_date is None:
            raise ValueError("custom 期間には customDate が必要です")
        return self


class ResponseFutureLetter(CamelModel):
    id: str
    user_id: str
    title: str
    content: str
    period: LetterPeriod
    delivery_date: dt.datetime
    is_opened: bool
    opened_at: Optional[dt.datetime] = None
    created_at: dt.datetime
    # pending / unopened / opened  (조회 시점 기준 계산값, 저장 안 함)
    status: str


class ResponseUnreadCount(CamelModel):
    unread_count: int
