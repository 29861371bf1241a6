from datetime import date, datetime, time

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitcoach.database import Base


class TrainingSession(Base):
    """A bookable session as seen by clients.

    Rows with a `plan_id` mirror the plan's `plan_sessions`; rows without one
    are one-off sessions booked directly by a trainer.
    """

    __tablename__ = "training_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    trainer_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    template_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_templates.id"), default=None
    )
    plan_id: Mapped[int | None] = mapped_column(ForeignKey("workout_plans.id"), default=None)
    scheduled_date: Mapped[date]
    scheduled_time: Mapped[time | None] = mapped_column(default=None)
    duration_minutes: Mapped[int] = mapped_column(default=60)
    type: Mapped[str] = mapped_column(String(50), default="personal_training")
    status: Mapped[str] = mapped_column(
        String(20), default="scheduled"
    )  # scheduled, confirmed, completed, cancelled, no_show
    location: Mapped[str | None] = mapped_column(String(200), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
