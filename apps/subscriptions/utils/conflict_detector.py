"""
Scheduling conflict checks for subscription slots.
"""
from datetime import timedelta

from django.db.models import Max, Sum

from apps.appointments.models import Appointment
from apps.core.utils.constants import (
    DEFAULT_APPOINTMENT_DURATION_MINUTES,
    PENDING_APPOINTMENT_STATUSES,
    SUBSCRIPTION_STATUS_ACTIVE,
)
from apps.subscriptions.models import Subscription


def _pending_appointments(barber_id):
    return Appointment.objects.filter(
        barber_id=barber_id,
        status__in=PENDING_APPOINTMENT_STATUSES,
    )


def get_lookback_minutes(barber_id):
    """
    Longest pending appointment of the barber, in minutes.

    Package appointments last the sum of their linked services, so the
    window is taken from the stored appointments rather than a fixed cap.
    An appointment starting earlier than this before a slot cannot overlap it.
    """
    pending = _pending_appointments(barber_id)
    longest_legacy = pending.aggregate(
        longest=Max('service__duration_minutes')
    )['longest']
    longest_linked = pending.annotate(
        linked_minutes=Sum('appointment_services__service__duration_minutes')
    ).aggregate(longest=Max('linked_minutes'))['longest']

    return max(
        longest_legacy or 0,
        longest_linked or 0,
        DEFAULT_APPOINTMENT_DURATION_MINUTES,
    )


def find_conflicting_appointment(barber_id, start, duration_minutes, exclude_ids=None,
                                 lookback_minutes=None):
    """
    Find a pending appointment of the barber overlapping [start, start + duration).

    Args:
        barber_id: Barber id
        start: aware datetime of the candidate slot
        duration_minutes: length of the candidate slot
        exclude_ids: appointment ids to ignore (slots being moved)
        lookback_minutes: how far before start to search; computed when omitted

    Returns:
        Appointment instance or None
    """
    if lookback_minutes is None:
        lookback_minutes = get_lookback_minutes(barber_id)
    end = start + timedelta(minutes=duration_minutes)

    candidates = _pending_appointments(barber_id).filter(
        date__lt=end,
        date__gte=start - timedelta(minutes=lookback_minutes),
    ).select_related(
        'client', 'service'
    ).prefetch_related(
        'appointment_services__service'
    ).order_by('date')

    if exclude_ids:
        candidates = candidates.exclude(id__in=exclude_ids)

    for appointment in candidates:
        appointment_end = appointment.date + timedelta(minutes=appointment.duration_minutes)
        if start < appointment_end and end > appointment.date:
            return appointment
    return None


def check_slot_conflicts(barber_id, dates, duration_minutes, exclude_ids=None):
    """
    Check every slot date for conflicts.

    Returns:
        list of dicts with index, date and the conflicting appointment (or None)
    """
    lookback_minutes = get_lookback_minutes(barber_id)
    results = []
    for index, date in enumerate(dates):
        results.append({
            'index': index,
            'date': date,
            'conflict': find_conflicting_appointment(
                barber_id, date, duration_minutes,
                exclude_ids=exclude_ids, lookback_minutes=lookback_minutes,
            ),
        })
    return results


def client_has_active_subscription(client_id, exclude_subscription_id=None):
    """Clients are limited to one active subscription"""
    queryset = Subscription.objects.filter(
        client_id=client_id,
        status=SUBSCRIPTION_STATUS_ACTIVE,
    )
    if exclude_subscription_id:
        queryset = queryset.exclude(id=exclude_subscription_id)
    return queryset.exists()
