"""In-app notifications for plans and today's workouts."""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.config import get_settings
from fitcoach.models.notification import Notification
from fitcoach.models.training_session import TrainingSession

logger = logging.getLogger(__name__)

PLAN_CREATED = "plan_created"
TODAYS_WORKOUT = "todays_workout"


async def dispatch(
    session: AsyncSession,
    user_id: int,
    notification_type: str,
    session_id: int | None = None,
) -> int | None:
    """Create a notification, best effort.

    Failures are logged and rolled back, never raised. Returns the new
    notification's ID, or None when nothing was created.
    """
    if not get_settings().notifications_enabled:
        return None

    try:
        notification = Notification(
            user_id=user_id,
            session_id=session_id,
            notification_type=notification_type,
            scheduled_for=datetime.utcnow(),
        )
        session.add(notification)
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception(
            "Failed to create %s notification for user %s", notification_type, user_id
        )
        return None

    logger.info("Created %s notification for user %s", notification_type, user_id)
    return notification.id


async def queue_todays_workouts(
    session: AsyncSession, today: date | None = None
) -> list[Notification]:
    """Create a "todays_workout" notification for every scheduled session today.

    Sessions that already have one are skipped, so this can run repeatedly.
    """
    today = today or date.today()

    sessions_result = await session.execute(
        select(TrainingSession).where(
            TrainingSession.scheduled_date == today,
            TrainingSession.status == "scheduled",
        )
    )
    todays = list(sessions_result.scalars().all())
    if not todays:
        return []

    notified_result = await session.execute(
        select(Notification.session_id).where(
            Notification.notification_type == TODAYS_WORKOUT,
            Notification.session_id.in_([s.id for s in todays]),
        )
    )
    already_notified = set(notified_result.scalars().all())

    created = []
    for ts in todays:
        if ts.id in already_notified:
            continue
        notification = Notification(
            user_id=ts.client_id,
            session_id=ts.id,
            notification_type=TODAYS_WORKOUT,
            scheduled_for=datetime.utcnow(),
        )
        session.add(notification)
        created.append(notification)

    await session.commit()
    for notification in created:
        await session.refresh(notification)
    logger.info("Queued %d today's workout notifications for %s", len(created), today)
    return created
