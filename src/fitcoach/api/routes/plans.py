"""Plans API routes."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.models.plan import PlanSession, WorkoutPlan
from fitcoach.models.training_session import TrainingSession
from fitcoach.planning.progress import calculate_progress
from fitcoach.planning.service import PlanNotFound, PlanService, PlanValidationError
from fitcoach.schemas.plan import (
    PlanProgressRead,
    PlanResyncRead,
    PlanSessionRead,
    WorkoutPlanCreate,
    WorkoutPlanRead,
)

router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.post("", response_model=WorkoutPlanRead, status_code=201)
async def create_plan(
    body: WorkoutPlanCreate,
    session: AsyncSession = Depends(get_db),
) -> WorkoutPlan:
    """Create a plan and generate its sessions.

    Returns 422 with a list of problems if the plan is invalid (bad dates,
    empty schedule, unknown template IDs, ...).
    """
    service = PlanService()
    try:
        result = await service.save_plan(session, body)
    except PlanValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors) from None
    return await _load_plan_with_sessions(session, result.plan_id)


@router.get("", response_model=list[WorkoutPlanRead])
async def list_plans(
    client_id: int | None = None,
    trainer_id: int | None = None,
    status: str | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[WorkoutPlan]:
    """List plans, newest first, optionally filtered by client/trainer/status."""
    stmt = select(WorkoutPlan).order_by(WorkoutPlan.start_date.desc(), WorkoutPlan.id.desc())
    if client_id is not None:
        stmt = stmt.where(WorkoutPlan.client_id == client_id)
    if trainer_id is not None:
        stmt = stmt.where(WorkoutPlan.trainer_id == trainer_id)
    if status is not None:
        stmt = stmt.where(WorkoutPlan.status == status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/{plan_id}", response_model=WorkoutPlanRead)
async def get_plan(
    plan_id: int,
    session: AsyncSession = Depends(get_db),
) -> WorkoutPlan:
    """Get a specific plan by ID with its sessions."""
    if await session.get(WorkoutPlan, plan_id) is None:
        raise HTTPException(status_code=404, detail="Plan not found.")
    return await _load_plan_with_sessions(session, plan_id)


@router.put("/{plan_id}", response_model=WorkoutPlanRead)
async def update_plan(
    plan_id: int,
    body: WorkoutPlanCreate,
    session: AsyncSession = Depends(get_db),
) -> WorkoutPlan:
    """Replace a plan and regenerate its sessions."""
    service = PlanService()
    try:
        result = await service.save_plan(session, body, plan_id=plan_id)
    except PlanNotFound:
        raise HTTPException(status_code=404, detail="Plan not found.") from None
    except PlanValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors) from None
    return await _load_plan_with_sessions(session, result.plan_id)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(
    plan_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    """Delete a plan together with its plan sessions and mirrored sessions."""
    try:
        await PlanService().delete_plan(session, plan_id)
    except PlanNotFound:
        raise HTTPException(status_code=404, detail="Plan not found.") from None


@router.get("/{plan_id}/sessions", response_model=list[PlanSessionRead])
async def get_plan_sessions(
    plan_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[PlanSession]:
    """List generated sessions for a plan in date order."""
    if await session.get(WorkoutPlan, plan_id) is None:
        raise HTTPException(status_code=404, detail="Plan not found.")

    stmt = (
        select(PlanSession)
        .where(PlanSession.plan_id == plan_id)
        .order_by(PlanSession.scheduled_date, PlanSession.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/{plan_id}/progress", response_model=PlanProgressRead)
async def get_plan_progress(
    plan_id: int,
    today: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> PlanProgressRead:
    """Completed / missed / remaining sessions against the planned total."""
    plan = await session.get(WorkoutPlan, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found.")

    stmt = select(TrainingSession).where(
        TrainingSession.plan_id == plan.id,
        TrainingSession.client_id == plan.client_id,
        TrainingSession.scheduled_date >= plan.start_date,
        TrainingSession.scheduled_date <= plan.end_date,
    )
    result = await session.execute(stmt)
    sessions = list(result.scalars().all())

    progress = calculate_progress(
        plan.start_date,
        plan.end_date,
        plan.schedule_type,
        plan.schedule_data,
        sessions,
        today=today,
    )
    return PlanProgressRead(
        plan_id=plan.id,
        completed=progress.completed,
        missed=progress.missed,
        remaining=progress.remaining,
        total=progress.total,
        percentage=progress.percentage,
    )


@router.post("/{plan_id}/resync", response_model=PlanResyncRead)
async def resync_plan_sessions(
    plan_id: int,
    session: AsyncSession = Depends(get_db),
) -> PlanResyncRead:
    """Re-create training sessions that are missing for a plan's sessions."""
    try:
        mirrored = await PlanService().resync_mirror(session, plan_id)
    except PlanNotFound:
        raise HTTPException(status_code=404, detail="Plan not found.") from None
    return PlanResyncRead(plan_id=plan_id, mirrored_sessions=mirrored)


async def _load_plan_with_sessions(session: AsyncSession, plan_id: int) -> WorkoutPlan:
    """Load a plan and attach its sessions as a list attribute for serialization."""
    stmt = select(WorkoutPlan).where(WorkoutPlan.id == plan_id)
    result = await session.execute(stmt)
    plan = result.scalar_one()

    sess_stmt = (
        select(PlanSession)
        .where(PlanSession.plan_id == plan_id)
        .order_by(PlanSession.scheduled_date, PlanSession.id)
    )
    sess_result = await session.execute(sess_stmt)
    plan.sessions = list(sess_result.scalars().all())  # type: ignore[attr-defined]
    return plan
