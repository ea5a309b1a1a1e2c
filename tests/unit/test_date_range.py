"""Tests for report date range calculation."""

from datetime import datetime, time, timedelta

import pytest

from jiracli.domain.models import Period
from jiracli.worklog.date_range import calculate_date_range

# Wednesday
TODAY = datetime(2024, 6, 12, 15, 30, 12)


class TestCalculateDateRange:
    """Test calculate_date_range per period."""

    def test_daily(self):
        """Daily covers today only."""
        date_range = calculate_date_range("daily", TODAY)
        assert date_range.start == datetime(2024, 6, 12, 0, 0, 0)
        assert date_range.end == datetime(2024, 6, 12, 23, 59, 59)

    def test_weekly_stops_at_today(self):
        """Weekly runs from Monday to today mid-week."""
        date_range = calculate_date_range("weekly", TODAY)
        assert date_range.start == datetime(2024, 6, 10)
        assert date_range.end == datetime(2024, 6, 12, 23, 59, 59)

    def test_weekly_on_sunday_covers_full_week(self):
        """Weekly on a Sunday ends on that Sunday."""
        date_range = calculate_date_range("weekly", datetime(2024, 6, 16, 9, 0))
        assert date_range.start.date() == datetime(2024, 6, 10).date()
        assert date_range.end.date() == datetime(2024, 6, 16).date()

    def test_weekly_on_monday(self):
        """Weekly on a Monday is a single day."""
        date_range = calculate_date_range("weekly", datetime(2024, 6, 10, 9, 0))
        assert date_range.start.date() == date_range.end.date()

    def test_biweekly_starts_previous_monday(self):
        """Biweekly starts on Monday of the previous week."""
        date_range = calculate_date_range("biweekly", TODAY)
        assert date_range.start == datetime(2024, 6, 3)
        assert date_range.end == datetime(2024, 6, 12, 23, 59, 59)

    def test_monthly(self):
        """Monthly runs from the 1st to today."""
        date_range = calculate_date_range("monthly", TODAY)
        assert date_range.start == datetime(2024, 6, 1)
        assert date_range.end == datetime(2024, 6, 12, 23, 59, 59)

    def test_monthly_on_last_day(self):
        """Monthly on the last day of a leap February covers the whole month."""
        date_range = calculate_date_range("monthly", datetime(2024, 2, 29, 8, 0))
        assert date_range.start == datetime(2024, 2, 1)
        assert date_range.end == datetime(2024, 2, 29, 23, 59, 59)

    def test_unknown_period_falls_back_to_daily(self):
        """Unknown keywords behave like daily."""
        assert calculate_date_range("yearly", TODAY) == calculate_date_range("daily", TODAY)

    def test_accepts_period_enum(self):
        """Period members work like their keywords."""
        assert calculate_date_range(Period.WEEKLY, TODAY) == calculate_date_range("weekly", TODAY)

    def test_defaults_to_now(self):
        """Without a reference the range covers the current day."""
        date_range = calculate_date_range()
        assert date_range.start.date() == datetime.now().date()

    @pytest.mark.parametrize("period", ["daily", "weekly", "biweekly", "monthly"])
    def test_bounds_hold_for_every_day_of_a_year(self, period):
        """End never passes today and boundaries are normalized."""
        day = datetime(2023, 1, 1, 12, 0)
        for _ in range(366):
            date_range = calculate_date_range(period, day)
            assert date_range.start <= date_range.end
            assert date_range.end.date() <= day.date()
            assert date_range.start.time() == time(0, 0, 0)
            assert date_range.end.time() == time(23, 59, 59)
            if period == "daily":
                assert date_range.start.date() == date_range.end.date() == day.date()
            if period == "weekly":
                assert date_range.start.isoweekday() == 1
            if period == "biweekly":
                assert date_range.start.isoweekday() == 1
                assert (day.date() - date_range.start.date()).days >= 7
            if period == "monthly":
                assert date_range.start.day == 1
            day += timedelta(days=1)


class TestDateRangeDays:
    """Test DateRange.days."""

    def test_days_are_inclusive(self):
        """Both boundary days are yielded."""
        date_range = calculate_date_range("biweekly", TODAY)
        days = [day.isoformat() for day in date_range.days()]
        assert days[0] == "2024-06-03"
        assert days[-1] == "2024-06-12"
        assert len(days) == 10
