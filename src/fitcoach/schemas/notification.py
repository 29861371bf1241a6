from datetime import datetime

from pydantic import BaseModel


class NotificationRead(BaseModel):
    id: int
    user_id: int
    session_id: int | None = None
    notification_type: str
    scheduled_for: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
