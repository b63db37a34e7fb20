# logbook/schemas/schema_review.py
import datetime as dt
from typing import Optional

from pydantic import Field

from logbook.schemas.schema_base import CamelModel

SCORE_MIN = 0
SCORE_MAX = 10


class CreateWeeklyReview(CamelModel):
    stability_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    stimulation_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    next_week_task: str = Field(min_length=1)
    free_memo: Optional[str] = None


class PatchWeeklyReview(CamelModel):
    stability_score: Optional[int] = Field(default=None, ge=SCORE_MIN, le=SCORE_MAX)
    stimulation_score: Optional[int] = Field(default=None, ge=SCORE_MIN, le=SCORE_MAX)
    next_week_task: Optional[str] = Field(default=None, min_length=1)
    free_memo: Optional[str] = None


class ResponseWeeklyReview(CamelModel):
    id: str
    user_id: str
    week_start_date: dt.datetime
    stability_score: int
    stimulation_score: int
    next_week_task: str
    free_memo: str
    created_at: dt.datetime
    updated_at: dt.datetime


class ResponseReviewPrompt(CamelModel):
    should_prompt: bool
    week_start_date: dt.datetime


class WeeklyScorePoint(CamelModel):
    week_label: str
    week_start_date: dt.datetime
    stability: int
    stimulation: int
