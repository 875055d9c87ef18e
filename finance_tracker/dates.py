"""
Calendar helpers for installment schedules and monthly summaries.
"""

from datetime import date

from dateutil.relativedelta import relativedelta


def add_calendar_months(start: date, months: int) -> date:
    """
    Shift a date by a number of calendar months.

    The day of month is preserved when the target month has it.
    Otherwise it is clamped to the last day of that month, so
    2024-01-31 + 1 month is 2024-02-29.
    """
    return start + relativedelta(months=months)


def month_key(day: date) -> str:
    """Return the YYYY-MM key used to group movements by month."""
    return day.strftime("%Y-%m")
