from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.core.exceptions import InvalidOperation
from apps.subscriptions.utils import date_calculator


def _dt(year, month, day, hour=10):
    return datetime(year, month, day, hour, 0, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize('plan_type, expected', [('weekly', 7), ('biweekly', 14)])
def test_get_interval_days(plan_type, expected):
    assert date_calculator.get_interval_days(plan_type) == expected


def test_get_interval_days_invalid_plan():
    with pytest.raises(InvalidOperation):
        date_calculator.get_interval_days('monthly')


def test_end_date_adds_calendar_months():
    assert date_calculator.calculate_end_date(_dt(2030, 1, 7), 1) == _dt(2030, 2, 7)
    assert date_calculator.calculate_end_date(_dt(2030, 1, 7), 6) == _dt(2030, 7, 7)


def test_end_date_clamps_month_end():
    assert date_calculator.calculate_end_date(_dt(2030, 1, 31), 1) == _dt(2030, 2, 28)
    assert date_calculator.calculate_end_date(_dt(2032, 1, 31), 1) == _dt(2032, 2, 29)


def test_total_slots_includes_start_date():
    start = _dt(2030, 1, 7)
    end = date_calculator.calculate_end_date(start, 1)

    # 31 days between Jan 7 and Feb 7
    assert date_calculator.calculate_total_slots(start, end, 7) == 5
    assert date_calculator.calculate_total_slots(start, end, 14) == 3


def test_total_slots_six_months_weekly():
    start = _dt(2030, 1, 6)
    end = date_calculator.calculate_end_date(start, 6)

    # 181 days
    assert date_calculator.calculate_total_slots(start, end, 7) == 26


def test_generate_appointment_dates():
    start = _dt(2030, 1, 7)

    dates = date_calculator.generate_appointment_dates(start, 3, 14)

    assert dates == [start, start + timedelta(days=14), start + timedelta(days=28)]


def test_generate_zero_slots():
    assert date_calculator.generate_appointment_dates(_dt(2030, 1, 7), 0, 7) == []


def test_recalculate_keeps_slot_count():
    start = _dt(2030, 1, 7)
    weekly = date_calculator.generate_appointment_dates(start, 4, 7)

    biweekly = date_calculator.recalculate_appointment_dates(weekly, 'biweekly', start)

    assert len(biweekly) == 4
    assert biweekly[-1] == start + timedelta(days=42)
