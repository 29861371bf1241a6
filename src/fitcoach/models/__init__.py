from fitcoach.models.metric import MetricEntry
from fitcoach.models.notification import Notification
from fitcoach.models.plan import PlanSession, WorkoutPlan
from fitcoach.models.template import WorkoutTemplate
from fitcoach.models.training_session import TrainingSession
from fitcoach.models.user import User

__all__ = [
    "MetricEntry",
    "Notification",
    "PlanSession",
    "TrainingSession",
    "User",
    "WorkoutPlan",
    "WorkoutTemplate",
]
