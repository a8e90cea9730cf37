"""
Date arithmetic for subscription slots
"""
from datetime import timedelta

from dateutil.relativedelta import relativedelta

from apps.core.exceptions import InvalidOperation
from apps.core.utils.constants import PLAN_TYPE_INTERVAL_DAYS


def get_interval_days(plan_type):
    """Days between two consecutive slots for a plan type"""
    try:
        return PLAN_TYPE_INTERVAL_DAYS[plan_type]
    except KeyError:
        raise InvalidOperation(f"Invalid plan type: {plan_type}")


def calculate_end_date(start_date, duration_months):
    """
    Add calendar months to the start date.

    Month ends are clamped (Jan 31 + 1 month is Feb 28/29).
    """
    return start_date + relativedelta(months=duration_months)


def calculate_total_slots(start_date, end_date, interval_days):
    # The start date itself is the first slot
    total_days = (end_date - start_date).days
    return total_days // interval_days + 1


def generate_appointment_dates(start_date, total_slots, interval_days):
    return [
        start_date + timedelta(days=index * interval_days)
        for index in range(total_slots)
    ]


def recalculate_appointment_dates(original_dates, new_plan_type, start_date):
    """Re-space the same number of slots with the interval of a new plan type"""
    return generate_appointment_dates(
        start_date,
        len(original_dates),
        get_interval_days(new_plan_type),
    )
