from fitcoach.schemas.calendar import CalendarEntryRead, CalendarWeekRead, WeeklyStatsRead
from fitcoach.schemas.metric import (
    MetricEntryCreate,
    MetricEntryRead,
    MetricEntryUpdate,
    MetricGroupRead,
)
from fitcoach.schemas.notification import NotificationRead
from fitcoach.schemas.plan import (
    PlanProgressRead,
    PlanResyncRead,
    PlanSessionRead,
    WorkoutPlanCreate,
    WorkoutPlanRead,
)
from fitcoach.schemas.system import StatusResponse
from fitcoach.schemas.template import WorkoutTemplateCreate, WorkoutTemplateRead
from fitcoach.schemas.training_session import (
    SessionStatusUpdate,
    TrainingSessionCreate,
    TrainingSessionDetailRead,
    TrainingSessionRead,
)
from fitcoach.schemas.user import UserCreate, UserRead

__all__ = [
    "CalendarEntryRead",
    "CalendarWeekRead",
    "MetricEntryCreate",
    "MetricEntryRead",
    "MetricEntryUpdate",
    "MetricGroupRead",
    "NotificationRead",
    "PlanProgressRead",
    "PlanResyncRead",
    "PlanSessionRead",
    "SessionStatusUpdate",
    "StatusResponse",
    "TrainingSessionCreate",
    "TrainingSessionDetailRead",
    "TrainingSessionRead",
    "UserCreate",
    "UserRead",
    "WeeklyStatsRead",
    "WorkoutPlanCreate",
    "WorkoutPlanRead",
    "WorkoutTemplateCreate",
    "WorkoutTemplateRead",
]
