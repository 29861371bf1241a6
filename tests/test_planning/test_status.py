"""Tests for session status transitions and display helpers."""

from datetime import date, datetime, time

import pytest

from fitcoach.planning.status import (
    InvalidStatusTransition,
    SessionStatus,
    effective_status,
    status_color,
    status_icon,
    status_label,
    transition,
)


class TestTransition:
    @pytest.mark.parametrize(
        ("current", "target"),
        [
            ("scheduled", "confirmed"),
            ("scheduled", "completed"),
            ("scheduled", "cancelled"),
            ("scheduled", "no_show"),
            ("confirmed", "completed"),
            ("confirmed", "scheduled"),
            ("cancelled", "scheduled"),
            ("no_show", "scheduled"),
        ],
    )
    def test_allowed(self, current: str, target: str) -> None:
        assert transition(current, target) == SessionStatus(target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            ("completed", "scheduled"),
            ("completed", "cancelled"),
            ("cancelled", "completed"),
            ("no_show", "completed"),
        ],
    )
    def test_disallowed(self, current: str, target: str) -> None:
        with pytest.raises(InvalidStatusTransition):
            transition(current, target)

    def test_same_status_is_noop(self) -> None:
        assert transition("completed", "completed") is SessionStatus.COMPLETED

    @pytest.mark.parametrize("target", ["missed", "ongoing", "bogus"])
    def test_display_and_unknown_statuses_cannot_be_stored(self, target: str) -> None:
        with pytest.raises(InvalidStatusTransition):
            transition("scheduled", target)

    def test_error_message(self) -> None:
        with pytest.raises(InvalidStatusTransition, match="from 'completed' to 'scheduled'"):
            transition(SessionStatus.COMPLETED, SessionStatus.SCHEDULED)


class TestDisplayHelpers:
    def test_known_statuses(self) -> None:
        assert status_color("completed") == "#34C759"
        assert status_icon("cancelled") == "x-circle"
        assert status_label("no_show") == "No Show"

    def test_unknown_status_fallbacks(self) -> None:
        assert status_color("weird") == "#8E8E93"
        assert status_icon("weird") == "help-circle"
        assert status_label("weird") == "Unknown"


class TestEffectiveStatus:
    DAY = date(2024, 5, 6)
    START = time(10, 0)

    def test_before_start_keeps_stored_status(self) -> None:
        now = datetime(2024, 5, 6, 9, 0)
        assert effective_status("confirmed", self.DAY, self.START, 60, now) == "confirmed"

    def test_during_session_is_ongoing(self) -> None:
        now = datetime(2024, 5, 6, 10, 30)
        assert effective_status("scheduled", self.DAY, self.START, 60, now) == "ongoing"

    def test_during_session_no_show_is_missed(self) -> None:
        now = datetime(2024, 5, 6, 10, 30)
        assert effective_status("no_show", self.DAY, self.START, 60, now) == "missed"

    def test_after_end_is_missed(self) -> None:
        now = datetime(2024, 5, 6, 11, 1)
        assert effective_status("scheduled", self.DAY, self.START, 60, now) == "missed"

    def test_completed_and_cancelled_pass_through(self) -> None:
        now = datetime(2024, 5, 7, 12, 0)
        assert effective_status("completed", self.DAY, self.START, 60, now) == "completed"
        assert effective_status("cancelled", self.DAY, self.START, 60, now) == "cancelled"

    def test_no_time_keeps_stored_status(self) -> None:
        now = datetime(2024, 6, 1, 12, 0)
        assert effective_status("scheduled", self.DAY, None, 60, now) == "scheduled"
