from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, Field, model_validator

from fitcoach.planning.schedule import ScheduleType, normalize_declaration


class PlanSessionRead(BaseModel):
    id: int
    plan_id: int
    template_id: int | None = None
    scheduled_date: date
    scheduled_time: time | None = None
    day_of_week: str | None = None
    week_number: int | None = None
    status: str
    notes: str | None = None

    model_config = {"from_attributes": True}


class WorkoutPlanBase(BaseModel):
    name: str = Field(max_length=200)
    description: str | None = None
    client_id: int
    trainer_id: int
    start_date: date
    end_date: date
    schedule_type: ScheduleType
    schedule_data: Any


class WorkoutPlanCreate(WorkoutPlanBase):
    """Plan as submitted by a trainer; the schedule is normalized on the way in."""

    @model_validator(mode="after")
    def normalize_schedule(self) -> "WorkoutPlanCreate":
        self.schedule_data = normalize_declaration(self.schedule_type, self.schedule_data)
        return self


class WorkoutPlanRead(WorkoutPlanBase):
    id: int
    status: str
    created_at: datetime
    updated_at: datetime
    sessions: list[PlanSessionRead] | None = None

    model_config = {"from_attributes": True}


class PlanProgressRead(BaseModel):
    plan_id: int
    completed: int
    missed: int
    remaining: int
    total: int
    percentage: int


class PlanResyncRead(BaseModel):
    plan_id: int
    mirrored_sessions: int
