"""Recurring session generation from a plan's schedule declaration.

A schedule declaration maps recurrence units to workout template IDs:

- weekly:  {"monday": 3, "wednesday": None, ...}
- monthly: {"1": {"monday": 3, ...}, "2": {...}, ...}  (week of month -> weekly map)
- custom:  [{"date": "2024-01-03", "template_id": 3, "label": "Leg day"}, ...]

A None template ID is a rest day. Declarations are normalized once, when they
enter the system (see `normalize_declaration`), so everything downstream can
rely on lowercase day names and string week keys.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any

DAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)  # Indexed by date.weekday()

MAX_WEEK_OF_MONTH = 5


class ScheduleType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


@dataclass
class SessionDraft:
    """A concrete session produced by expanding a schedule, not yet persisted."""

    scheduled_date: date
    template_id: int
    day_of_week: str | None = None
    week_number: int | None = None
    notes: str | None = None
    status: str = "scheduled"


def week_of_month(day: date | int) -> int:
    """Bucket a date (or day-of-month number) into a week using ceil(day / 7).

    Days 1-7 are week 1, 8-14 week 2, and so on. This is not aligned to
    calendar weeks: week 1 always starts on the 1st, whatever its weekday.
    """
    day_of_month = day if isinstance(day, int) else day.day
    return math.ceil(day_of_month / 7)


def _template_ref(value: Any) -> int | None:
    """A template reference is a positive int, or None for a rest day."""
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Invalid template ID: {value!r}")
    return value


def _normalize_week(mapping: dict[str, Any]) -> dict[str, int | None]:
    week: dict[str, int | None] = {}
    for key, template_id in mapping.items():
        day_name = str(key).strip().lower()
        if day_name not in DAY_NAMES:
            raise ValueError(f"Unknown day name: {key!r}")
        week[day_name] = _template_ref(template_id)
    return week


def normalize_declaration(schedule_type: ScheduleType | str, data: Any) -> Any:
    """Return a JSON-serializable, canonical copy of a schedule declaration.

    Raises ValueError on unknown day names, week numbers outside 1..5 or
    malformed custom entries.
    """
    schedule_type = ScheduleType(schedule_type)

    if schedule_type is ScheduleType.WEEKLY:
        if not isinstance(data, dict):
            raise ValueError("Weekly schedule must be a mapping of day name to template")
        return _normalize_week(data)

    if schedule_type is ScheduleType.MONTHLY:
        if not isinstance(data, dict):
            raise ValueError("Monthly schedule must be a mapping of week number to days")
        monthly: dict[str, dict[str, int | None]] = {}
        for week_key, week in data.items():
            try:
                week_number = int(week_key)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid week number: {week_key!r}") from None
            if not 1 <= week_number <= MAX_WEEK_OF_MONTH:
                raise ValueError(f"Week number must be between 1 and {MAX_WEEK_OF_MONTH}")
            if not isinstance(week, dict):
                raise ValueError(f"Week {week_number} must be a mapping of day name to template")
            monthly[str(week_number)] = _normalize_week(week)
        return monthly

    if not isinstance(data, list):
        raise ValueError("Custom schedule must be a list of dated workouts")
    entries = []
    for raw in data:
        if not isinstance(raw, dict) or "date" not in raw:
            raise ValueError("Custom workouts need a date")
        raw_date = raw["date"]
        entry_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date))
        entries.append(
            {
                "date": entry_date.isoformat(),
                "template_id": _template_ref(raw.get("template_id")),
                "label": raw.get("label") or None,
            }
        )
    entries.sort(key=lambda e: e["date"])
    return entries


def _iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _generate_weekly(declaration: dict[str, int | None], start: date, end: date) -> list[SessionDraft]:
    drafts = []
    for day in _iter_days(start, end):
        day_name = DAY_NAMES[day.weekday()]
        template_id = declaration.get(day_name)
        if template_id:
            drafts.append(
                SessionDraft(scheduled_date=day, template_id=template_id, day_of_week=day_name)
            )
    return drafts


def _generate_monthly(
    declaration: dict[str, dict[str, int | None]], start: date, end: date
) -> list[SessionDraft]:
    drafts = []
    for day in _iter_days(start, end):
        week_number = week_of_month(day)
        week = declaration.get(str(week_number))
        if not week:
            continue
        day_name = DAY_NAMES[day.weekday()]
        template_id = week.get(day_name)
        if template_id:
            drafts.append(
                SessionDraft(
                    scheduled_date=day,
                    template_id=template_id,
                    day_of_week=day_name,
                    week_number=week_number,
                )
            )
    return drafts


def _generate_custom(declaration: list[dict[str, Any]]) -> list[SessionDraft]:
    return [
        SessionDraft(
            scheduled_date=date.fromisoformat(entry["date"]),
            template_id=entry["template_id"],
            notes=entry.get("label"),
        )
        for entry in declaration
        if entry.get("template_id")
    ]


def generate_sessions(
    schedule_type: ScheduleType | str,
    declaration: Any,
    start: date,
    end: date,
) -> list[SessionDraft]:
    """Expand a normalized schedule declaration into dated session drafts.

    `end` is inclusive. Weekly and monthly schedules walk every day in the
    range; custom schedules emit one draft per entry with a template. Rest
    days emit nothing. Callers must not rely on the output order.
    """
    schedule_type = ScheduleType(schedule_type)
    if schedule_type is ScheduleType.WEEKLY:
        return _generate_weekly(declaration, start, end)
    if schedule_type is ScheduleType.MONTHLY:
        return _generate_monthly(declaration, start, end)
    return _generate_custom(declaration)


def referenced_template_ids(schedule_type: ScheduleType | str, declaration: Any) -> list[int]:
    """All non-rest template IDs in a declaration, de-duplicated, in order."""
    schedule_type = ScheduleType(schedule_type)
    if schedule_type is ScheduleType.WEEKLY:
        values = list(declaration.values())
    elif schedule_type is ScheduleType.MONTHLY:
        values = [tid for week in declaration.values() for tid in week.values()]
    else:
        values = [entry.get("template_id") for entry in declaration]
    return list(dict.fromkeys(v for v in values if v))


def workouts_per_week(schedule_type: ScheduleType | str, declaration: Any) -> int:
    """Number of non-rest entries per week of a weekly or monthly declaration.

    For monthly declarations this is the average over the declared weeks,
    rounded up. Custom declarations have no weekly rhythm and return 0.
    """
    schedule_type = ScheduleType(schedule_type)
    if schedule_type is ScheduleType.WEEKLY:
        return sum(1 for tid in declaration.values() if tid)
    if schedule_type is ScheduleType.MONTHLY:
        if not declaration:
            return 0
        entries = sum(1 for week in declaration.values() for tid in week.values() if tid)
        return math.ceil(entries / len(declaration))
    return 0
