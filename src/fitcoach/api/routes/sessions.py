"""Training session endpoints: booking, listing and status changes."""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.formatting import format_date, format_time
from fitcoach.models.template import WorkoutTemplate
from fitcoach.models.training_session import TrainingSession
from fitcoach.models.user import User
from fitcoach.planning.status import (
    InvalidStatusTransition,
    effective_status,
    status_color,
    status_icon,
    status_label,
    transition,
)
from fitcoach.schemas.training_session import (
    SessionStatusUpdate,
    TrainingSessionCreate,
    TrainingSessionDetailRead,
    TrainingSessionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post("", response_model=TrainingSessionRead, status_code=201)
async def create_session(
    body: TrainingSessionCreate,
    session: AsyncSession = Depends(get_db),
) -> TrainingSession:
    """Book a one-off training session outside any plan."""
    errors = []
    if await session.get(User, body.client_id) is None:
        errors.append(f"Client {body.client_id} not found")
    if await session.get(User, body.trainer_id) is None:
        errors.append(f"Trainer {body.trainer_id} not found")
    if body.template_id is not None and await session.get(WorkoutTemplate, body.template_id) is None:
        errors.append(f"Template {body.template_id} not found")
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    training_session = TrainingSession(**body.model_dump(), status="scheduled")
    session.add(training_session)
    await session.commit()
    await session.refresh(training_session)
    return training_session


@router.get("", response_model=list[TrainingSessionRead])
async def list_sessions(
    client_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    status: str | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[TrainingSession]:
    """List a client's sessions in date order, optionally within a date range."""
    stmt = (
        select(TrainingSession)
        .where(TrainingSession.client_id == client_id)
        .order_by(TrainingSession.scheduled_date, TrainingSession.scheduled_time)
    )
    if date_from is not None:
        stmt = stmt.where(TrainingSession.scheduled_date >= date_from)
    if date_to is not None:
        stmt = stmt.where(TrainingSession.scheduled_date <= date_to)
    if status is not None:
        stmt = stmt.where(TrainingSession.status == status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/{session_id}", response_model=TrainingSessionDetailRead)
async def get_session(
    session_id: int,
    session: AsyncSession = Depends(get_db),
) -> TrainingSessionDetailRead:
    """Get a session with its display status and formatted date/time."""
    training_session = await session.get(TrainingSession, session_id)
    if training_session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    display_status = effective_status(
        training_session.status,
        training_session.scheduled_date,
        training_session.scheduled_time,
        training_session.duration_minutes,
        datetime.now(),
    )
    base = TrainingSessionRead.model_validate(training_session)
    return TrainingSessionDetailRead(
        **base.model_dump(),
        display_status=display_status,
        status_label=status_label(display_status),
        status_color=status_color(display_status),
        status_icon=status_icon(display_status),
        display_date=format_date(training_session.scheduled_date),
        display_time=format_time(training_session.scheduled_time),
    )


@router.patch("/{session_id}/status", response_model=TrainingSessionRead)
async def update_session_status(
    session_id: int,
    body: SessionStatusUpdate,
    session: AsyncSession = Depends(get_db),
) -> TrainingSession:
    """Change a session's status. Returns 409 for a disallowed transition."""
    training_session = await session.get(TrainingSession, session_id)
    if training_session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    try:
        new_status = transition(training_session.status, body.status)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e)) from None

    logger.info(
        "Session %s status %s -> %s", session_id, training_session.status, new_status.value
    )
    training_session.status = new_status.value
    await session.commit()
    await session.refresh(training_session)
    return training_session
