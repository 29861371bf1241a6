"""Weekly training calendar for a client."""

from datetime import date, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.models.plan import PlanSession, WorkoutPlan
from fitcoach.models.training_session import TrainingSession
from fitcoach.planning.calendar import merge_calendar, week_dates, weekly_stats
from fitcoach.schemas.calendar import CalendarEntryRead, CalendarWeekRead, WeeklyStatsRead

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("/{client_id}", response_model=CalendarWeekRead)
async def get_week_calendar(
    client_id: int,
    week_of: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> CalendarWeekRead:
    """Monday-to-Sunday schedule for a client, with weekly stats.

    Combines sessions from the client's active plans with booked training
    sessions; days without either are returned as rest days.
    """
    days = week_dates(week_of or date.today())

    plan_stmt = (
        select(PlanSession)
        .join(WorkoutPlan, PlanSession.plan_id == WorkoutPlan.id)
        .where(
            WorkoutPlan.client_id == client_id,
            WorkoutPlan.status == "active",
            PlanSession.scheduled_date >= days[0],
            PlanSession.scheduled_date <= days[-1],
        )
    )
    plan_result = await session.execute(plan_stmt)
    plan_sessions = list(plan_result.scalars().all())

    training_stmt = select(TrainingSession).where(
        TrainingSession.client_id == client_id,
        TrainingSession.scheduled_date >= days[0],
        TrainingSession.scheduled_date <= days[-1],
    )
    training_result = await session.execute(training_stmt)
    training_sessions = list(training_result.scalars().all())

    entries = merge_calendar(days, plan_sessions, training_sessions, datetime.now())
    return CalendarWeekRead(
        client_id=client_id,
        week_start=days[0],
        entries=[CalendarEntryRead.model_validate(e) for e in entries],
        stats=WeeklyStatsRead.model_validate(weekly_stats(entries)),
    )
