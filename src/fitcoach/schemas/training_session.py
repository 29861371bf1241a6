from datetime import date, datetime, time

from pydantic import BaseModel, Field

from fitcoach.planning.status import SessionStatus


class TrainingSessionBase(BaseModel):
    client_id: int
    trainer_id: int
    template_id: int | None = None
    scheduled_date: date
    scheduled_time: time | None = None
    duration_minutes: int = Field(default=60, gt=0)
    type: str = Field(default="personal_training", max_length=50)
    location: str | None = Field(default=None, max_length=200)
    notes: str | None = None


class TrainingSessionCreate(TrainingSessionBase):
    pass


class TrainingSessionRead(TrainingSessionBase):
    id: int
    plan_id: int | None = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class TrainingSessionDetailRead(TrainingSessionRead):
    """Session with presentation fields resolved for display."""

    display_status: str
    status_label: str
    status_color: str
    status_icon: str
    display_date: str
    display_time: str


class SessionStatusUpdate(BaseModel):
    status: SessionStatus
