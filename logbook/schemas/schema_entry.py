# logbook/schemas/schema_entry.py
import datetime as dt
from typing import List, Optional

from pydantic import Field, field_validator

from logbook.constants.entry import MOOD_MAX, MOOD_MIN
from logbook.schemas.schema_base import CamelModel


class CreateEntry(CamelModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: str = Field(min_length=1)
    tags: Optional[List[str]] = None
    conditions: Optional[List[str]] = None
    weather: Optional[str] = Field(default=None, max_length=50)
    mood: Optional[int] = Field(default=None, ge=MOOD_MIN, le=MOOD_MAX)
    image_url: Optional[str] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str):
        if not v.strip():
            raise ValueError("本文を入力してください")
        return v


class PatchEntry(CamelModel):
    """
    부분 수정. 요청에 들어온 필드(model_fields_set)만 덮어쓴다.
    - 필드 생략: 기존 값 유지
    - null 명시: 기본값으로 초기화 (mood 는 NULL)
    """
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    conditions: Optional[List[str]] = None
    weather: Optional[str] = Field(default=None, max_length=50)
    mood: Optional[int] = Field(default=None, ge=MOOD_MIN, le=MOOD_MAX)
    image_url: Optional[str] = None


class ResponseEntry(CamelModel):
    id: str
    user_id: str
    title: str
    content: str
    tags: List[str]
    conditions: List[str]
    weather: str
    mood: Optional[int] = None
    image_url: str
    created_at: dt.datetime
    updated_at: dt.datetime
