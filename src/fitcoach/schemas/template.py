from datetime import datetime

from pydantic import BaseModel, Field


class WorkoutTemplateBase(BaseModel):
    trainer_id: int
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(default=None, max_length=50)
    estimated_duration_minutes: int | None = Field(default=None, gt=0)


class WorkoutTemplateCreate(WorkoutTemplateBase):
    pass


class WorkoutTemplateRead(WorkoutTemplateBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}
