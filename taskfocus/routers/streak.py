# taskfocus/routers/streak.py
from datetime import datetime

from fastapi import APIRouter, Depends

from taskfocus.dependencies.store import get_now, get_streak
from taskfocus.schemas.task import StreakRead
from taskfocus.services.streak import StreakTracker, display_text

router = APIRouter(prefix="/api", tags=["Streak"])


@router.get("/streak", response_model=StreakRead)
def get_streak_info(
    streak: StreakTracker = Depends(get_streak),
    now: datetime = Depends(get_now),
):
    snap = streak.snapshot(now)
    return StreakRead(
        current_streak=snap.current_streak,
        tasks_completed_today=snap.tasks_completed_today,
        last_completed_date=snap.last_completed_date,
        display_text=display_text(snap),
    )
