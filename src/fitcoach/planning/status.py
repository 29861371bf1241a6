"""Session status: allowed transitions and display mapping."""

from datetime import date, datetime, time, timedelta
from enum import Enum


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"
    # Derived for display only, never stored
    MISSED = "missed"
    ONGOING = "ongoing"


STORED_STATUSES = frozenset(
    {
        SessionStatus.SCHEDULED,
        SessionStatus.CONFIRMED,
        SessionStatus.COMPLETED,
        SessionStatus.CANCELLED,
        SessionStatus.NO_SHOW,
    }
)

TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.SCHEDULED: frozenset(
        {
            SessionStatus.CONFIRMED,
            SessionStatus.COMPLETED,
            SessionStatus.CANCELLED,
            SessionStatus.NO_SHOW,
        }
    ),
    SessionStatus.CONFIRMED: frozenset(
        {
            SessionStatus.SCHEDULED,
            SessionStatus.COMPLETED,
            SessionStatus.CANCELLED,
            SessionStatus.NO_SHOW,
        }
    ),
    # Cancelled and no-show sessions can be rescheduled; completed is final.
    SessionStatus.CANCELLED: frozenset({SessionStatus.SCHEDULED}),
    SessionStatus.NO_SHOW: frozenset({SessionStatus.SCHEDULED}),
    SessionStatus.COMPLETED: frozenset(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot change session status from '{current}' to '{target}'")
        self.current = current
        self.target = target


def transition(current: SessionStatus | str, target: SessionStatus | str) -> SessionStatus:
    """Validate a status change and return the new status.

    Setting the current status again is a no-op. Display-only statuses can
    never be stored.
    """
    try:
        current_status = SessionStatus(current)
        target_status = SessionStatus(target)
    except ValueError:
        raise InvalidStatusTransition(str(current), str(target)) from None

    if target_status not in STORED_STATUSES:
        raise InvalidStatusTransition(current_status.value, target_status.value)
    if current_status == target_status:
        return target_status
    if target_status not in TRANSITIONS.get(current_status, frozenset()):
        raise InvalidStatusTransition(current_status.value, target_status.value)
    return target_status


_COLORS = {
    "scheduled": "#007AFF",
    "confirmed": "#007AFF",
    "completed": "#34C759",
    "missed": "#FF3B30",
    "cancelled": "#FF3B30",
    "ongoing": "#FFA500",
    "no_show": "#FF9500",
}

_ICONS = {
    "scheduled": "calendar",
    "confirmed": "check-circle",
    "completed": "check-circle",
    "missed": "alert-circle",
    "cancelled": "x-circle",
    "ongoing": "play-circle",
    "no_show": "alert-triangle",
}

_LABELS = {
    "scheduled": "Scheduled",
    "confirmed": "Confirmed",
    "completed": "Completed",
    "missed": "Missed",
    "cancelled": "Cancelled",
    "ongoing": "Ongoing",
    "no_show": "No Show",
}


def status_color(status: str) -> str:
    return _COLORS.get(status, "#8E8E93")


def status_icon(status: str) -> str:
    return _ICONS.get(status, "help-circle")


def status_label(status: str) -> str:
    return _LABELS.get(status, "Unknown")


def effective_status(
    status: str,
    scheduled_date: date,
    scheduled_time: time | None,
    duration_minutes: int | None,
    now: datetime | None = None,
) -> str:
    """Status to display for a session, taking the clock into account.

    Before the session starts the stored status is shown. While it runs a
    scheduled or confirmed session is "ongoing"; once it is over anything not
    completed is "missed". Sessions without a start time keep their stored
    status.
    """
    if status in ("completed", "cancelled"):
        return status
    if scheduled_time is None:
        return status or "scheduled"

    now = now or datetime.now()
    start = datetime.combine(scheduled_date, scheduled_time)
    end = start + timedelta(minutes=duration_minutes or 60)

    if now < start:
        return status or "scheduled"
    if now < end:
        return "ongoing" if status in ("scheduled", "confirmed") else "missed"
    return "missed"
