"""Tests for the weekly calendar merge."""

from dataclasses import dataclass
from datetime import date, datetime, time

from fitcoach.planning.calendar import merge_calendar, week_dates, weekly_stats

NOW = datetime(2024, 1, 10, 8, 0)  # Wednesday morning


@dataclass
class FakePlanSession:
    id: int
    plan_id: int
    scheduled_date: date
    template_id: int | None = 1
    scheduled_time: time | None = None
    status: str = "scheduled"
    notes: str | None = None


@dataclass
class FakeTrainingSession:
    id: int
    scheduled_date: date
    plan_id: int | None = None
    template_id: int | None = 1
    scheduled_time: time | None = None
    duration_minutes: int = 60
    status: str = "scheduled"
    notes: str | None = None


class TestWeekDates:
    def test_monday_to_sunday(self) -> None:
        days = week_dates(date(2024, 1, 10))
        assert days[0] == date(2024, 1, 8)
        assert days[-1] == date(2024, 1, 14)
        assert len(days) == 7

    def test_sunday_belongs_to_previous_monday(self) -> None:
        assert week_dates(date(2024, 1, 14))[0] == date(2024, 1, 8)


class TestMergeCalendar:
    def test_empty_week_is_all_rest(self) -> None:
        entries = merge_calendar(week_dates(NOW.date()), [], [], NOW)
        assert len(entries) == 7
        assert all(e.kind == "rest" and e.status == "rest" for e in entries)
        assert [e.day_letter for e in entries] == ["M", "T", "W", "T", "F", "S", "S"]
        assert [e.today for e in entries].count(True) == 1

    def test_mirrored_plan_session_shown_once(self) -> None:
        day = date(2024, 1, 8)
        plan_sessions = [FakePlanSession(id=1, plan_id=5, scheduled_date=day)]
        training = [FakeTrainingSession(id=9, plan_id=5, scheduled_date=day, status="completed")]

        entries = merge_calendar(week_dates(day), plan_sessions, training, NOW)
        monday = [e for e in entries if e.day == day]

        assert len(monday) == 1
        assert monday[0].kind == "training"
        assert monday[0].session_id == 9
        assert monday[0].status == "completed"

    def test_unmirrored_plan_session_falls_back(self) -> None:
        day = date(2024, 1, 12)
        plan_sessions = [FakePlanSession(id=1, plan_id=5, scheduled_date=day, notes="Legs")]

        entries = merge_calendar(week_dates(day), plan_sessions, [], NOW)
        friday = [e for e in entries if e.day == day]

        assert len(friday) == 1
        assert friday[0].kind == "personal"
        assert friday[0].plan_session_id == 1
        assert friday[0].notes == "Legs"

    def test_one_off_and_plan_session_same_day(self) -> None:
        day = date(2024, 1, 11)
        plan_sessions = [FakePlanSession(id=1, plan_id=5, scheduled_date=day)]
        training = [
            FakeTrainingSession(id=2, plan_id=None, scheduled_date=day, scheduled_time=time(18, 0)),
        ]
        entries = merge_calendar(week_dates(day), plan_sessions, training, NOW)
        thursday = [e for e in entries if e.day == day]
        assert {e.kind for e in thursday} == {"personal", "training"}

    def test_past_scheduled_training_session_shows_missed(self) -> None:
        day = date(2024, 1, 8)
        training = [FakeTrainingSession(id=3, scheduled_date=day, scheduled_time=time(7, 0))]
        entries = merge_calendar(week_dates(day), [], training, NOW)
        assert [e.status for e in entries if e.day == day] == ["missed"]


class TestWeeklyStats:
    def test_stats(self) -> None:
        days = week_dates(NOW.date())
        training = [
            FakeTrainingSession(id=1, scheduled_date=days[0], status="completed", duration_minutes=45),
            FakeTrainingSession(id=2, scheduled_date=days[2], status="completed", duration_minutes=30),
            FakeTrainingSession(id=3, scheduled_date=days[4]),
            FakeTrainingSession(id=4, scheduled_date=days[5]),
        ]
        stats = weekly_stats(merge_calendar(days, [], training, NOW))
        assert stats.total_workouts == 4
        assert stats.completed_workouts == 2
        assert stats.total_duration == 75
        assert stats.completion_rate == 50.0

    def test_rest_week(self) -> None:
        stats = weekly_stats(merge_calendar(week_dates(NOW.date()), [], [], NOW))
        assert stats.total_workouts == 0
        assert stats.completion_rate == 0.0
