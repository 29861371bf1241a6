from datetime import date, datetime, time

from pydantic import BaseModel, Field


class MetricEntryBase(BaseModel):
    metric_type: str = Field(max_length=50)
    value: float
    unit: str | None = Field(default=None, max_length=20)
    entry_date: date
    entry_time: time | None = None
    notes: str | None = None


class MetricEntryCreate(MetricEntryBase):
    user_id: int


class MetricEntryUpdate(BaseModel):
    value: float | None = None
    unit: str | None = Field(default=None, max_length=20)
    entry_date: date | None = None
    entry_time: time | None = None
    notes: str | None = None


class MetricEntryRead(MetricEntryBase):
    id: int
    user_id: int
    unit: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MetricGroupRead(BaseModel):
    period: str
    label: str
    entries: list[MetricEntryRead]
    average_value: float
    latest_value: float
    start_date: date
    end_date: date

    model_config = {"from_attributes": True}
