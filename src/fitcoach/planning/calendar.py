"""Weekly calendar view built from plan sessions and training sessions."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol

from fitcoach.planning.status import effective_status

DAY_LETTERS = ("M", "T", "W", "T", "F", "S", "S")


class PlanSessionLike(Protocol):
    id: int
    plan_id: int
    template_id: int | None
    scheduled_date: date
    scheduled_time: time | None
    status: str
    notes: str | None


class TrainingSessionLike(Protocol):
    id: int
    plan_id: int | None
    template_id: int | None
    scheduled_date: date
    scheduled_time: time | None
    duration_minutes: int
    status: str
    notes: str | None


@dataclass
class CalendarEntry:
    day: date
    day_letter: str
    today: bool
    kind: str  # training, personal, rest
    status: str
    session_id: int | None = None
    plan_session_id: int | None = None
    plan_id: int | None = None
    template_id: int | None = None
    scheduled_time: time | None = None
    duration_minutes: int | None = None
    notes: str | None = None


@dataclass
class WeeklyStats:
    total_workouts: int
    completed_workouts: int
    total_duration: int
    completion_rate: float


def week_dates(ref: date) -> list[date]:
    """Monday..Sunday of the week containing `ref`."""
    monday = ref - timedelta(days=ref.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def merge_calendar(
    days: Sequence[date],
    plan_sessions: Sequence[PlanSessionLike],
    training_sessions: Sequence[TrainingSessionLike],
    now: datetime | None = None,
) -> list[CalendarEntry]:
    """Merge both session sources into one list of entries per day.

    Training sessions win: a plan session is only shown when no training
    session mirrors it (same plan and date), e.g. after a failed mirror
    write. Days with nothing scheduled get a single "rest" entry.
    """
    now = now or datetime.now()
    today = now.date()
    mirrored = {(ts.plan_id, ts.scheduled_date) for ts in training_sessions if ts.plan_id}

    entries: list[CalendarEntry] = []
    for day in days:
        letter = DAY_LETTERS[day.weekday()]
        day_entries: list[CalendarEntry] = []

        for ps in plan_sessions:
            if ps.scheduled_date != day or (ps.plan_id, day) in mirrored:
                continue
            day_entries.append(
                CalendarEntry(
                    day=day,
                    day_letter=letter,
                    today=day == today,
                    kind="personal",
                    status=ps.status or "scheduled",
                    plan_session_id=ps.id,
                    plan_id=ps.plan_id,
                    template_id=ps.template_id,
                    scheduled_time=ps.scheduled_time,
                    notes=ps.notes,
                )
            )

        for ts in training_sessions:
            if ts.scheduled_date != day:
                continue
            day_entries.append(
                CalendarEntry(
                    day=day,
                    day_letter=letter,
                    today=day == today,
                    kind="training",
                    status=effective_status(
                        ts.status, ts.scheduled_date, ts.scheduled_time, ts.duration_minutes, now
                    ),
                    session_id=ts.id,
                    plan_id=ts.plan_id,
                    template_id=ts.template_id,
                    scheduled_time=ts.scheduled_time,
                    duration_minutes=ts.duration_minutes,
                    notes=ts.notes,
                )
            )

        if not day_entries:
            day_entries.append(
                CalendarEntry(day=day, day_letter=letter, today=day == today, kind="rest", status="rest")
            )

        day_entries.sort(key=lambda e: e.scheduled_time or time.min)
        entries.extend(day_entries)

    return entries


def weekly_stats(entries: Sequence[CalendarEntry]) -> WeeklyStats:
    workouts = [e for e in entries if e.kind != "rest"]
    completed = [e for e in workouts if e.status == "completed"]
    total_duration = sum(e.duration_minutes or 0 for e in completed)
    rate = round(len(completed) / len(workouts) * 100, 1) if workouts else 0.0
    return WeeklyStats(
        total_workouts=len(workouts),
        completed_workouts=len(completed),
        total_duration=total_duration,
        completion_rate=rate,
    )
