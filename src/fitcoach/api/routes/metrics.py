"""Body metric endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.database import get_db
from fitcoach.metrics.grouping import default_unit, group_entries
from fitcoach.models.metric import MetricEntry
from fitcoach.models.user import User
from fitcoach.schemas.metric import (
    MetricEntryCreate,
    MetricEntryRead,
    MetricEntryUpdate,
    MetricGroupRead,
)

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.post("", response_model=MetricEntryRead, status_code=201)
async def create_metric_entry(
    body: MetricEntryCreate,
    session: AsyncSession = Depends(get_db),
) -> MetricEntry:
    """Log a metric value. The unit defaults to the metric type's usual unit."""
    if await session.get(User, body.user_id) is None:
        raise HTTPException(status_code=422, detail=f"User {body.user_id} not found")

    unit = body.unit or default_unit(body.metric_type)
    if not unit:
        raise HTTPException(
            status_code=422, detail=f"Unit is required for metric type '{body.metric_type}'"
        )

    entry = MetricEntry(**body.model_dump(exclude={"unit"}), unit=unit)
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


@router.get("", response_model=list[MetricEntryRead])
async def list_metric_entries(
    user_id: int,
    metric_type: str | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[MetricEntry]:
    """List a user's metric entries, newest first."""
    stmt = (
        select(MetricEntry)
        .where(MetricEntry.user_id == user_id)
        .order_by(MetricEntry.entry_date.desc(), MetricEntry.id.desc())
    )
    if metric_type is not None:
        stmt = stmt.where(MetricEntry.metric_type == metric_type)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/history", response_model=list[MetricGroupRead])
async def get_metric_history(
    user_id: int,
    metric_type: str,
    period: str = Query(default="week", pattern=r"^(day|week|month|year)$"),
    session: AsyncSession = Depends(get_db),
) -> list[MetricGroupRead]:
    """Entries for one metric grouped by day, week, month or year."""
    stmt = select(MetricEntry).where(
        MetricEntry.user_id == user_id,
        MetricEntry.metric_type == metric_type,
    )
    result = await session.execute(stmt)
    groups = group_entries(result.scalars().all(), period)
    return [MetricGroupRead.model_validate(g) for g in groups]


@router.put("/{entry_id}", response_model=MetricEntryRead)
async def update_metric_entry(
    entry_id: int,
    body: MetricEntryUpdate,
    session: AsyncSession = Depends(get_db),
) -> MetricEntry:
    """Edit a logged entry. Only the fields sent are changed."""
    entry = await session.get(MetricEntry, entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Metric entry not found")

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in ("value", "unit", "entry_date"):
            continue
        setattr(entry, field, value)
    await session.commit()
    await session.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_metric_entry(
    entry_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    entry = await session.get(MetricEntry, entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Metric entry not found")
    await session.delete(entry)
    await session.commit()
