# logbook/routers/insights.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from logbook.auth.dependencies import get_current_user
from logbook.db.database import get_db
from logbook.errors import ValidationFailure
from logbook.models.users import User
from logbook.schemas.schema_insight import ResponseInsights
from logbook.services.entries import list_entries_by_user
from logbook.services.insights import TREND_PERIODS, build_insights
from logbook.utils.dates import now_local

router = APIRouter(prefix="/insights", tags=["インサイト"])


@router.get("", response_model=ResponseInsights)
def get_insights(
    days: int = Query(default=7, description="気分トレンドの期間 (7 or 30)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if days not in TREND_PERIODS:
        raise ValidationFailure(f"days は {TREND_PERIODS} のいずれか")
    entries = list_entries_by_user(db, current_user.uid)
    return build_insights(entries, now_local(), days)
