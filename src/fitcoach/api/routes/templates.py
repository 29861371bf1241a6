"""Workout template endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.models.plan import PlanSession, WorkoutPlan
from fitcoach.models.template import WorkoutTemplate
from fitcoach.models.training_session import TrainingSession
from fitcoach.models.user import User
from fitcoach.planning.schedule import referenced_template_ids
from fitcoach.schemas.template import WorkoutTemplateCreate, WorkoutTemplateRead

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    body: WorkoutTemplateCreate,
    session: AsyncSession = Depends(get_db),
) -> WorkoutTemplate:
    if await session.get(User, body.trainer_id) is None:
        raise HTTPException(status_code=422, detail=f"Trainer {body.trainer_id} not found")

    template = WorkoutTemplate(**body.model_dump())
    session.add(template)
    await session.commit()
    await session.refresh(template)
    return template


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    trainer_id: int | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[WorkoutTemplate]:
    stmt = select(WorkoutTemplate).order_by(WorkoutTemplate.name)
    if trainer_id is not None:
        stmt = stmt.where(WorkoutTemplate.trainer_id == trainer_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: int,
    session: AsyncSession = Depends(get_db),
) -> WorkoutTemplate:
    template = await session.get(WorkoutTemplate, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    """Delete a template that no plan or session references."""
    template = await session.get(WorkoutTemplate, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")

    if await _template_in_use(session, template_id):
        raise HTTPException(status_code=409, detail="Template is used by existing plans or sessions")

    await session.delete(template)
    await session.commit()


async def _template_in_use(session: AsyncSession, template_id: int) -> bool:
    """True if a plan session, training session or plan schedule references the template."""
    for column in (PlanSession.template_id, TrainingSession.template_id):
        result = await session.execute(
            select(column).where(column == template_id).limit(1)
        )
        if result.scalar_one_or_none() is not None:
            return True

    plans = await session.execute(select(WorkoutPlan.schedule_type, WorkoutPlan.schedule_data))
    return any(
        template_id in referenced_template_ids(row.schedule_type, row.schedule_data)
        for row in plans.all()
    )
