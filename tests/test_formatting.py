"""Tests for date/time display formatting."""

from datetime import date, datetime, time

import pytest

from fitcoach.formatting import format_date, format_time


class TestFormatDate:
    def test_date_string(self) -> None:
        assert format_date("2024-01-01") == "Monday, January 1, 2024"

    def test_iso_datetime_string(self) -> None:
        assert format_date("2024-07-24T14:30:00") == "Wednesday, July 24, 2024"
        assert format_date("2024-07-24T14:30:00Z") == "Wednesday, July 24, 2024"

    def test_date_and_datetime_objects(self) -> None:
        assert format_date(date(2024, 2, 29)) == "Thursday, February 29, 2024"
        assert format_date(datetime(2024, 2, 29, 8, 0)) == "Thursday, February 29, 2024"

    @pytest.mark.parametrize("value", [None, ""])
    def test_not_set(self, value: str | None) -> None:
        assert format_date(value) == "Date not set"

    @pytest.mark.parametrize(
        "value",
        ["2024-13-01", "2023-02-29", "not a date", "1899-12-31", "2101-01-01", date(1899, 5, 1)],
    )
    def test_invalid(self, value: str | date) -> None:
        assert format_date(value) == "Invalid Date"

    def test_year_bounds_inclusive(self) -> None:
        assert format_date("1900-01-01") == "Monday, January 1, 1900"
        assert format_date("2100-12-31") == "Friday, December 31, 2100"


class TestFormatTime:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("10:00", "10:00 AM"),
            ("00:05", "12:05 AM"),
            ("12:00", "12:00 PM"),
            ("14:30:00", "2:30 PM"),
            ("9:07", "9:07 AM"),
            ("23:59", "11:59 PM"),
        ],
    )
    def test_valid(self, value: str, expected: str) -> None:
        assert format_time(value) == expected

    def test_time_object(self) -> None:
        assert format_time(time(0, 0)) == "12:00 AM"

    @pytest.mark.parametrize("value", ["25:70", "24:00", "10:60", "10", "ten:thirty", "10:"])
    def test_invalid(self, value: str) -> None:
        assert format_time(value) == "Invalid Time"

    @pytest.mark.parametrize("value", [None, ""])
    def test_not_set(self, value: str | None) -> None:
        assert format_time(value) == "Time not set"
