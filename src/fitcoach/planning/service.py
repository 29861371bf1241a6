"""Plan save pipeline: validate, regenerate sessions, mirror, notify.

Saving a plan happens in steps with deliberately different failure handling:

1. Validation. Any problem aborts the save with a `PlanValidationError`
   listing every issue found.
2. Primary write. The plan row and its `plan_sessions` are written in one
   transaction; a failure rolls back and propagates.
3. Mirror write. The new sessions are copied into `training_sessions`, which
   is what clients see on their dashboard and calendar. A failure here is
   logged and the save still succeeds; `resync_mirror` repairs it later.
4. Notifications, best effort (see `fitcoach.planning.notifications`).

Every step replaces the plan's derived rows, so saving the same plan twice
leaves the same result.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.config import Settings, get_settings
from fitcoach.models.plan import PlanSession, WorkoutPlan
from fitcoach.models.template import WorkoutTemplate
from fitcoach.models.training_session import TrainingSession
from fitcoach.models.user import User
from fitcoach.planning import notifications
from fitcoach.planning.schedule import (
    ScheduleType,
    generate_sessions,
    referenced_template_ids,
)
from fitcoach.schemas.plan import WorkoutPlanCreate

logger = logging.getLogger(__name__)

# Mirrored sessions in these states have not been acted on yet and are
# replaced when a plan is regenerated. Anything else is kept as history.
REPLACEABLE_STATUSES = ("scheduled", "confirmed")


class PlanValidationError(ValueError):
    """The plan cannot be saved. `errors` lists every problem found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class PlanNotFound(LookupError):
    pass


@dataclass
class PlanSaveResult:
    plan_id: int
    sessions_created: int
    sessions_mirrored: int
    mirror_error: str | None = None


async def validate_template_ids(
    session: AsyncSession, template_ids: Sequence[int]
) -> tuple[list[int], list[int]]:
    """Split template IDs into (valid, invalid) against the templates table."""
    if not template_ids:
        return [], []
    result = await session.execute(
        select(WorkoutTemplate.id).where(WorkoutTemplate.id.in_(template_ids))
    )
    known = set(result.scalars().all())
    valid = [tid for tid in template_ids if tid in known]
    invalid = [tid for tid in template_ids if tid not in known]
    return valid, invalid


async def build_training_session_rows(
    session: AsyncSession,
    client_id: int,
    trainer_id: int,
    plan_sessions: Sequence[PlanSession],
    settings: Settings | None = None,
) -> list[TrainingSession]:
    """Translate plan sessions into `training_sessions` rows.

    Duration and type come from the session's template, falling back to the
    configured defaults when the template does not define them.
    """
    settings = settings or get_settings()
    template_ids = {ps.template_id for ps in plan_sessions if ps.template_id}
    templates: dict[int, WorkoutTemplate] = {}
    if template_ids:
        result = await session.execute(
            select(WorkoutTemplate).where(WorkoutTemplate.id.in_(template_ids))
        )
        templates = {t.id: t for t in result.scalars().all()}

    rows = []
    for ps in plan_sessions:
        template = templates.get(ps.template_id) if ps.template_id else None
        rows.append(
            TrainingSession(
                client_id=client_id,
                trainer_id=trainer_id,
                template_id=ps.template_id,
                plan_id=ps.plan_id,
                scheduled_date=ps.scheduled_date,
                scheduled_time=ps.scheduled_time,
                duration_minutes=(
                    template.estimated_duration_minutes
                    if template and template.estimated_duration_minutes
                    else settings.default_session_duration_minutes
                ),
                type=(
                    template.category
                    if template and template.category
                    else settings.default_session_type
                ),
                status=ps.status,
                notes=ps.notes,
            )
        )
    return rows


class PlanService:
    """Creates, edits and deletes workout plans and their derived sessions."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def validate(self, session: AsyncSession, payload: WorkoutPlanCreate) -> None:
        """Raise PlanValidationError if the plan cannot be saved."""
        errors: list[str] = []

        if not payload.name.strip():
            errors.append("Please enter a plan name")

        if await session.get(User, payload.client_id) is None:
            errors.append(f"Client {payload.client_id} not found")
        if await session.get(User, payload.trainer_id) is None:
            errors.append(f"Trainer {payload.trainer_id} not found")

        if payload.start_date >= payload.end_date:
            errors.append("End date must be after start date")

        template_ids = referenced_template_ids(payload.schedule_type, payload.schedule_data)
        if not template_ids:
            errors.append("Please add at least one workout to the schedule")

        if payload.schedule_type is ScheduleType.CUSTOM:
            for entry in payload.schedule_data:
                entry_date = date.fromisoformat(entry["date"])
                if not payload.start_date <= entry_date <= payload.end_date:
                    errors.append(f"Workout on {entry_date} is outside the plan dates")

        _, invalid = await validate_template_ids(session, template_ids)
        if invalid:
            errors.append(
                "The following template IDs are invalid: "
                + ", ".join(str(tid) for tid in invalid)
            )

        if errors:
            raise PlanValidationError(errors)

    async def save_plan(
        self,
        session: AsyncSession,
        payload: WorkoutPlanCreate,
        plan_id: int | None = None,
        today: date | None = None,
    ) -> PlanSaveResult:
        """Create a plan (plan_id=None) or replace an existing one."""
        today = today or date.today()
        await self.validate(session, payload)

        drafts = generate_sessions(
            payload.schedule_type, payload.schedule_data, payload.start_date, payload.end_date
        )

        # Primary write
        try:
            if plan_id is None:
                plan = WorkoutPlan(status="active")
                session.add(plan)
            else:
                plan = await self._get_plan(session, plan_id)
                await self._clear_derived_sessions(session, plan.id)

            plan.name = payload.name.strip()
            plan.description = (payload.description or "").strip() or None
            plan.client_id = payload.client_id
            plan.trainer_id = payload.trainer_id
            plan.start_date = payload.start_date
            plan.end_date = payload.end_date
            plan.schedule_type = payload.schedule_type.value
            plan.schedule_data = payload.schedule_data
            await session.flush()

            plan_sessions = [
                PlanSession(
                    plan_id=plan.id,
                    template_id=d.template_id,
                    scheduled_date=d.scheduled_date,
                    day_of_week=d.day_of_week,
                    week_number=d.week_number,
                    status=d.status,
                    notes=d.notes,
                )
                for d in drafts
            ]
            session.add_all(plan_sessions)
            await session.commit()
        except PlanNotFound:
            raise
        except Exception:
            await session.rollback()
            logger.exception("Failed to save plan sessions")
            raise

        saved_plan_id = plan.id
        client_id = plan.client_id
        trainer_id = plan.trainer_id
        logger.info("Saved plan %s with %d sessions", saved_plan_id, len(plan_sessions))

        # Mirror write
        mirrored: list[tuple[int, date]] = []
        mirror_error: str | None = None
        try:
            rows = await self._missing_mirror_rows(
                session, saved_plan_id, client_id, trainer_id, plan_sessions
            )
            session.add_all(rows)
            await session.commit()
            mirrored = [(row.id, row.scheduled_date) for row in rows]
            logger.info("Mirrored %d sessions for plan %s", len(mirrored), saved_plan_id)
        except Exception as e:
            await session.rollback()
            mirror_error = str(e)
            logger.exception("Failed to mirror sessions for plan %s", saved_plan_id)

        # Notifications
        if plan_id is None:
            await notifications.dispatch(session, client_id, notifications.PLAN_CREATED)
        for session_id, scheduled_date in mirrored:
            if scheduled_date == today:
                await notifications.dispatch(
                    session, client_id, notifications.TODAYS_WORKOUT, session_id=session_id
                )

        return PlanSaveResult(
            plan_id=saved_plan_id,
            sessions_created=len(drafts),
            sessions_mirrored=len(mirrored),
            mirror_error=mirror_error,
        )

    async def resync_mirror(self, session: AsyncSession, plan_id: int) -> int:
        """Add missing `training_sessions` rows for a plan. Returns how many."""
        plan = await self._get_plan(session, plan_id)
        result = await session.execute(
            select(PlanSession).where(PlanSession.plan_id == plan_id)
        )
        plan_sessions = list(result.scalars().all())

        rows = await self._missing_mirror_rows(
            session, plan.id, plan.client_id, plan.trainer_id, plan_sessions
        )
        session.add_all(rows)
        await session.commit()
        logger.info("Resynced plan %s: %d sessions mirrored", plan_id, len(rows))
        return len(rows)

    async def delete_plan(self, session: AsyncSession, plan_id: int) -> None:
        plan = await self._get_plan(session, plan_id)
        await session.execute(delete(TrainingSession).where(TrainingSession.plan_id == plan_id))
        await session.execute(delete(PlanSession).where(PlanSession.plan_id == plan_id))
        await session.delete(plan)
        await session.commit()
        logger.info("Deleted plan %s", plan_id)

    async def _get_plan(self, session: AsyncSession, plan_id: int) -> WorkoutPlan:
        plan = await session.get(WorkoutPlan, plan_id)
        if plan is None:
            raise PlanNotFound(f"Plan {plan_id} not found")
        return plan

    async def _clear_derived_sessions(self, session: AsyncSession, plan_id: int) -> None:
        await session.execute(delete(PlanSession).where(PlanSession.plan_id == plan_id))
        await session.execute(
            delete(TrainingSession).where(
                TrainingSession.plan_id == plan_id,
                TrainingSession.status.in_(REPLACEABLE_STATUSES),
            )
        )

    async def _missing_mirror_rows(
        self,
        session: AsyncSession,
        plan_id: int,
        client_id: int,
        trainer_id: int,
        plan_sessions: Sequence[PlanSession],
    ) -> list[TrainingSession]:
        """Mirror rows for plan sessions that have no training session yet.

        A plan session counts as mirrored when a training session of the same
        plan exists on the same date with the same template.
        """
        result = await session.execute(
            select(TrainingSession.scheduled_date, TrainingSession.template_id).where(
                TrainingSession.plan_id == plan_id
            )
        )
        existing = {(row.scheduled_date, row.template_id) for row in result.all()}
        missing = [
            ps for ps in plan_sessions if (ps.scheduled_date, ps.template_id) not in existing
        ]
        return await build_training_session_rows(
            session, client_id, trainer_id, missing, self._settings
        )
