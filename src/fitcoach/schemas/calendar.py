from datetime import date, time

from pydantic import BaseModel


class CalendarEntryRead(BaseModel):
    day: date
    day_letter: str
    today: bool
    kind: str
    status: str
    session_id: int | None = None
    plan_session_id: int | None = None
    plan_id: int | None = None
    template_id: int | None = None
    scheduled_time: time | None = None
    duration_minutes: int | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}


class WeeklyStatsRead(BaseModel):
    total_workouts: int
    completed_workouts: int
    total_duration: int
    completion_rate: float

    model_config = {"from_attributes": True}


class CalendarWeekRead(BaseModel):
    client_id: int
    week_start: date
    entries: list[CalendarEntryRead]
    stats: WeeklyStatsRead
