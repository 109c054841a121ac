"""Routes exposing the static reading plan catalog."""
from typing import List, Optional

from fastapi import APIRouter, Query

from reading_tracker.config import get_settings
from reading_tracker.models.schemas import ReadingPlanDay, ReadingPlanToday
from reading_tracker.services.reading_plan_catalog import READING_PLAN, entries_for_month, get_entry
from reading_tracker.utils.plan_calendar import day_number_for_date, today_in_timezone

router = APIRouter(prefix="/api/reading-plan", tags=["reading-plan"])


@router.get("", response_model=List[ReadingPlanDay])
async def list_reading_plan(
    month: Optional[int] = Query(None, ge=1, le=12, description="Only days in this calendar month"),
):
    entries = entries_for_month(month) if month else READING_PLAN
    return [entry.to_dict() for entry in entries]


@router.get("/today", response_model=ReadingPlanToday)
async def get_today():
    settings = get_settings()
    today = today_in_timezone(settings.plan_timezone)
    day_number = day_number_for_date(today, settings.plan_start_date)
    entry = get_entry(day_number)
    return {
        "date": today.isoformat(),
        "day_number": day_number,
        "entry": entry.to_dict() if entry else None,
    }
