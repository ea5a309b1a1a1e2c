from datetime import datetime, time, timedelta
from typing import Optional, Union
import calendar

from ..domain.models import DateRange, Period


def calculate_date_range(
    period: Union[Period, str] = Period.DAILY, today: Optional[datetime] = None
) -> DateRange:
    """
    Calculate the reporting range for a period.

    Supported periods:
    - "daily" (today only)
    - "weekly" (Monday of this week up to today)
    - "biweekly" (Monday of last week up to today)
    - "monthly" (first of this month up to today)

    Unknown periods behave like "daily". The end never lies after today.

    Args:
        period: Period keyword
        today: Reference moment, defaults to now

    Returns:
        DateRange from 00:00:00 on the first day to 23:59:59 on the last
    """
    if today is None:
        today = datetime.now()
    period = Period.parse(period)
    current = today.date()

    if period is Period.WEEKLY:
        start_date = current - timedelta(days=current.isoweekday() - 1)
        end_date = min(current, start_date + timedelta(days=6))

    elif period is Period.BIWEEKLY:
        start_date = current - timedelta(days=current.isoweekday() - 1 + 7)
        end_date = current

    elif period is Period.MONTHLY:
        start_date = current.replace(day=1)
        _, last_day = calendar.monthrange(current.year, current.month)
        end_date = min(current, current.replace(day=last_day))

    else:
        start_date = current
        end_date = current

    return DateRange(
        start=datetime.combine(start_date, time(0, 0, 0)),
        end=datetime.combine(end_date, time(23, 59, 59)),
    )
