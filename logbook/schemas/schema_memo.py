# logbook/schemas/schema_memo.py
import datetime as dt
from typing import Optional

from logbook.schemas.schema_base import CamelModel


class CreateMemo(CamelModel):
    content: str = ""
    image_url: Optional[str] = None


class ResponseMemo(CamelModel):
    id: str
    user_id: str
    content: str
    image_url: str
    created_at: dt.datetime
