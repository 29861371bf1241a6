from datetime import date, datetime, time
from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitcoach.database import Base


class WorkoutPlan(Base):
    __tablename__ = "workout_plans"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    client_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    trainer_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    start_date: Mapped[date]
    end_date: Mapped[date]  # Inclusive
    schedule_type: Mapped[str] = mapped_column(String(20))  # weekly, monthly, custom
    schedule_data: Mapped[Any] = mapped_column(JSON)  # Normalized schedule declaration
    status: Mapped[str] = mapped_column(
        String(20), default="active"
    )  # active, completed, archived
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class PlanSession(Base):
    __tablename__ = "plan_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    plan_id: Mapped[int] = mapped_column(ForeignKey("workout_plans.id"))
    template_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_templates.id"), default=None
    )
    scheduled_date: Mapped[date]
    scheduled_time: Mapped[time | None] = mapped_column(default=None)
    day_of_week: Mapped[str | None] = mapped_column(String(10), default=None)  # monday..sunday
    week_number: Mapped[int | None] = mapped_column(default=None)  # Monthly plans only
    status: Mapped[str] = mapped_column(String(20), default="scheduled")
    notes: Mapped[str | None] = mapped_column(Text, default=None)
