"""Notification endpoints."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.models.notification import Notification
from fitcoach.planning.notifications import queue_todays_workouts
from fitcoach.schemas.notification import NotificationRead

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
async def list_notifications(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.post("/todays-workouts", response_model=list[NotificationRead], status_code=201)
async def send_todays_workout_notifications(
    today: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[Notification]:
    """Notify every client with a scheduled session today (once per session)."""
    return await queue_todays_workouts(session, today)
