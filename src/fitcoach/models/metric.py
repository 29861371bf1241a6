from datetime import date, datetime, time

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitcoach.database import Base


class MetricEntry(Base):
    __tablename__ = "metric_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    metric_type: Mapped[str] = mapped_column(String(50))  # weight, body_fat, waist, ...
    value: Mapped[float]
    unit: Mapped[str] = mapped_column(String(20))
    entry_date: Mapped[date]
    entry_time: Mapped[time | None] = mapped_column(default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
