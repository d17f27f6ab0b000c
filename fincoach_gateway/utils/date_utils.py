"""Date manipulation utilities"""

from datetime import date

from dateutil.relativedelta import relativedelta


def subtract_months(from_date: date, months: int) -> date:
    """Step back whole calendar months, clamping the day to the target month's length.

    Example: 2024-05-31 minus 3 months -> 2024-02-29
    """
    return from_date - relativedelta(months=months)


def add_months(from_date: date, months: int) -> date:
    """Step forward whole calendar months (day clamped like subtract_months)"""
    return from_date + relativedelta(months=months)


def whole_years_between(earlier: date, later: date) -> int:
    """Completed years from earlier to later (a person's age on `later`)"""
    return relativedelta(later, earlier).years
