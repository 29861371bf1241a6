"""Plan progress: completed / missed / remaining against the planned total."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from fitcoach.planning.schedule import ScheduleType, workouts_per_week


class SessionLike(Protocol):
    status: str
    scheduled_date: date


@dataclass
class PlanProgress:
    completed: int = 0
    missed: int = 0
    remaining: int = 0
    total: int = 0
    percentage: int = 0


def plan_weeks(start: date, end: date) -> int:
    """Whole weeks between start and end, rounded up (0 when end <= start)."""
    days = (end - start).days
    if days <= 0:
        return 0
    return math.ceil(days / 7)


def estimate_total(
    schedule_type: ScheduleType | str, declaration: Any, start: date, end: date
) -> int:
    """Estimated number of planned workouts.

    workouts per week x weeks in range. This is an estimate and can differ
    from the number of generated sessions (partial weeks, the monthly
    week-of-month rule). Custom plans count their dated workouts directly.
    """
    schedule_type = ScheduleType(schedule_type)
    if schedule_type is ScheduleType.CUSTOM:
        return sum(1 for entry in declaration if entry.get("template_id"))
    return workouts_per_week(schedule_type, declaration) * plan_weeks(start, end)


def calculate_progress(
    start: date,
    end: date,
    schedule_type: ScheduleType | str,
    declaration: Any,
    sessions: Iterable[SessionLike],
    today: date | None = None,
) -> PlanProgress:
    """Tally session statuses for a plan.

    - completed: status "completed"
    - missed: "no_show", "cancelled", or "scheduled" dated before today
    - remaining: "scheduled" dated today or later

    Sessions with any other status (e.g. "confirmed") are not counted.
    """
    today = today or date.today()
    progress = PlanProgress(total=estimate_total(schedule_type, declaration, start, end))

    for s in sessions:
        if s.status == "completed":
            progress.completed += 1
        elif s.status in ("no_show", "cancelled"):
            progress.missed += 1
        elif s.status == "scheduled":
            if s.scheduled_date < today:
                progress.missed += 1
            else:
                progress.remaining += 1

    if progress.total > 0:
        # Half rounds up (12.5 -> 13), unlike round()
        progress.percentage = math.floor(progress.completed / progress.total * 100 + 0.5)
    return progress
