"""Group metric entries into day/week/month/year buckets for history views."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Protocol

# metric_type -> (display name, default unit)
METRIC_CATALOG: dict[str, tuple[str, str]] = {
    "weight": ("Weight", "kg"),
    "body_fat": ("Body Fat", "%"),
    "muscle_mass": ("Muscle Mass", "kg"),
    "chest": ("Chest", "cm"),
    "waist": ("Waist", "cm"),
    "hips": ("Hips", "cm"),
    "biceps": ("Biceps", "cm"),
    "thighs": ("Thighs", "cm"),
    "height": ("Height", "cm"),
    "blood_pressure": ("Blood Pressure", "mmHg"),
    "heart_rate": ("Heart Rate", "bpm"),
    "steps": ("Steps", "steps"),
    "sleep_hours": ("Sleep", "hours"),
    "water_intake": ("Water Intake", "L"),
}

PERIODS = ("day", "week", "month", "year")


class MetricEntryLike(Protocol):
    entry_date: date
    entry_time: time | None
    value: float


@dataclass
class MetricGroup:
    period: str  # Bucket key: 2024-01-07, 2024-01, 2024
    label: str
    entries: list
    average_value: float
    latest_value: float
    start_date: date
    end_date: date


def default_unit(metric_type: str) -> str:
    return METRIC_CATALOG.get(metric_type, ("", ""))[1]


def week_start(day: date) -> date:
    """Sunday starting the week that contains `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def period_key(day: date, period: str) -> str:
    if period == "week":
        return week_start(day).isoformat()
    if period == "month":
        return f"{day.year}-{day.month:02d}"
    if period == "year":
        return str(day.year)
    return day.isoformat()


def period_label(key: str, period: str) -> str:
    """Display label for a bucket key, e.g. "Week of Jan 7" or "January 2024"."""
    if period == "week":
        start = date.fromisoformat(key)
        return f"Week of {start:%b} {start.day}"
    if period == "month":
        year, month = key.split("-")
        return f"{date(int(year), int(month), 1):%B} {year}"
    return key


def group_entries(entries: Iterable[MetricEntryLike], period: str = "week") -> list[MetricGroup]:
    """Bucket entries by period, newest bucket first.

    Entries inside a bucket are ordered oldest first; `latest_value` is the
    value of the newest entry in the bucket.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period!r}")

    buckets: dict[str, list[MetricEntryLike]] = {}
    for entry in entries:
        buckets.setdefault(period_key(entry.entry_date, period), []).append(entry)

    groups = []
    for key, bucket in buckets.items():
        ordered = sorted(bucket, key=lambda e: (e.entry_date, e.entry_time or time.min))
        values = [e.value for e in ordered]
        groups.append(
            MetricGroup(
                period=key,
                label=period_label(key, period),
                entries=ordered,
                average_value=sum(values) / len(values),
                latest_value=values[-1],
                start_date=ordered[0].entry_date,
                end_date=ordered[-1].entry_date,
            )
        )

    groups.sort(key=lambda g: g.start_date, reverse=True)
    return groups
