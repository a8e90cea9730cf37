"""
Subscription service layer for managing subscription business logic.

This module provides high-level functions for:
- Previewing a subscription with per-slot conflict detection
- Creating subscriptions and their appointment slots atomically
- Pausing, resuming, cancelling and changing the plan type
- Bulk reassignment and cancellation used by barber deactivation
"""
import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import Count, Prefetch, Q
from django.utils import timezone

from apps.appointments.models import Appointment, AppointmentService
from apps.barbers.models import Barber
from apps.clients.models import Client
from apps.core.exceptions import InvalidOperation, ResourceConflict, ResourceNotFound
from apps.core.utils.constants import (
    APPOINTMENT_STATUS_CANCELLED,
    APPOINTMENT_STATUS_COMPLETED,
    APPOINTMENT_STATUS_IN_PROGRESS,
    APPOINTMENT_STATUS_SCHEDULED,
    CHANGE_TYPE_APPOINTMENT_ADJUSTED,
    CHANGE_TYPE_BARBER_TRANSFERRED,
    CHANGE_TYPE_CANCELLED,
    CHANGE_TYPE_CREATED,
    CHANGE_TYPE_PAUSED,
    CHANGE_TYPE_PLAN_CHANGED,
    CHANGE_TYPE_RESUMED,
    DEFAULT_APPOINTMENT_DURATION_MINUTES,
    LIVE_SUBSCRIPTION_STATUSES,
    MAX_DURATION_MONTHS,
    MIN_DURATION_MONTHS,
    PENDING_APPOINTMENT_STATUSES,
    SUBSCRIPTION_STATUS_ACTIVE,
    SUBSCRIPTION_STATUS_CANCELLED,
    SUBSCRIPTION_STATUS_PAUSED,
)
from apps.packages.models import Package, PackageService
from apps.subscriptions.models import Subscription, SubscriptionChangeLog
from apps.subscriptions.utils import conflict_detector, date_calculator

logger = logging.getLogger(__name__)


def _with_related(queryset):
    return queryset.select_related(
        'client', 'barber', 'package', 'service'
    ).prefetch_related(
        Prefetch(
            'package__package_services',
            queryset=PackageService.objects.select_related('service').order_by('position'),
        )
    )


def _aware(value):
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


def _iso(value):
    return value.isoformat() if value else None


def _notify_after_commit(subscription_id, event):
    from apps.notifications.tasks import notify_subscription_event_task

    subscription_id = str(subscription_id)
    transaction.on_commit(lambda: notify_subscription_event_task.delay(subscription_id, event))


def get_subscription_duration(subscription):
    """
    Minutes taken by one slot of a subscription.

    Package subscriptions use the sum of the package services, legacy
    ones the single service, anything else the default slot length.
    """
    if subscription.package_id:
        durations = [
            link.service.duration_minutes
            for link in subscription.package.package_services.all()
        ]
        if durations:
            return sum(durations)
    if subscription.service_id:
        return subscription.service.duration_minutes
    return DEFAULT_APPOINTMENT_DURATION_MINUTES


# ---------------------------------------------------------------------------
# Bulk operations used by the barber lifecycle
# ---------------------------------------------------------------------------

def live_subscriptions_of_barber(barber_id):
    return Subscription.objects.filter(
        barber_id=barber_id,
        status__in=LIVE_SUBSCRIPTION_STATUSES,
    )


def find_active_or_paused_by_barber(barber_id):
    """
    Subscriptions of a barber that still hold future work.

    Returns:
        QuerySet with client, package (and its services) and legacy service joined
    """
    return _with_related(live_subscriptions_of_barber(barber_id)).order_by('created_at')


def reassign_barber(subscription_ids, new_barber_id, reason=''):
    """
    Move active/paused subscriptions to another barber.

    Args:
        subscription_ids: Subscription ids
        new_barber_id: Barber taking over
        reason: Stored on each change log

    Returns:
        Number of subscriptions moved
    """
    with transaction.atomic():
        rows = list(
            Subscription.objects.select_for_update().filter(
                id__in=subscription_ids,
                status__in=LIVE_SUBSCRIPTION_STATUSES,
            ).values('id', 'barber_id')
        )
        if not rows:
            return 0

        updated = Subscription.objects.filter(
            id__in=[row['id'] for row in rows]
        ).update(barber_id=new_barber_id, updated_at=timezone.now())

        SubscriptionChangeLog.objects.bulk_create([
            SubscriptionChangeLog(
                subscription_id=row['id'],
                change_type=CHANGE_TYPE_BARBER_TRANSFERRED,
                description='Barbeiro transferido',
                old_value={'barber_id': str(row['barber_id'])},
                new_value={'barber_id': str(new_barber_id)},
                reason=reason,
            )
            for row in rows
        ])

    logger.info(f"Reassigned {updated} subscriptions to barber {new_barber_id}")
    return updated


def cancel_all(subscription_ids, reason):
    """
    Cancel every subscription in the list that is still active or paused.

    Already cancelled or completed subscriptions are left untouched.

    Returns:
        Number of subscriptions cancelled
    """
    now = timezone.now()
    with transaction.atomic():
        ids = list(
            Subscription.objects.select_for_update().filter(
                id__in=subscription_ids,
                status__in=LIVE_SUBSCRIPTION_STATUSES,
            ).values_list('id', flat=True)
        )
        if not ids:
            return 0

        updated = Subscription.objects.filter(id__in=ids).update(
            status=SUBSCRIPTION_STATUS_CANCELLED,
            cancelled_at=now,
            cancellation_reason=reason or '',
            updated_at=now,
        )

        SubscriptionChangeLog.objects.bulk_create([
            SubscriptionChangeLog(
                subscription_id=subscription_id,
                change_type=CHANGE_TYPE_CANCELLED,
                description='Assinatura cancelada em lote',
                reason=reason or '',
            )
            for subscription_id in ids
        ])

    logger.info(f"Cancelled {updated} subscriptions: {reason}")
    return updated


# ---------------------------------------------------------------------------
# Subscription lifecycle
# ---------------------------------------------------------------------------

def _load_enrolment_targets(client_id, barber_id, package_id):
    client = Client.objects.filter(id=client_id).first()
    if client is None:
        raise ResourceNotFound(f"Client {client_id} not found")

    barber = Barber.objects.active().filter(id=barber_id).first()
    if barber is None:
        raise ResourceNotFound(f"Barber {barber_id} not found or inactive")

    package = Package.objects.active().with_services().filter(id=package_id).first()
    if package is None:
        raise ResourceNotFound(f"Package {package_id} not found or inactive")

    return client, barber, package


def _validate_duration_months(duration_months):
    if not MIN_DURATION_MONTHS <= duration_months <= MAX_DURATION_MONTHS:
        raise InvalidOperation(
            f"Duration must be between {MIN_DURATION_MONTHS} and {MAX_DURATION_MONTHS} months"
        )


def _conflict_details(appointment):
    if appointment is None:
        return None
    return {
        'existing_appointment_id': appointment.id,
        'existing_client_name': appointment.client.name,
        'existing_start_time': appointment.date,
        'existing_end_time': appointment.date + timedelta(minutes=appointment.duration_minutes),
    }


def preview_subscription(client_id, barber_id, package_id, start_date, duration_months):
    """
    Build the slot plan of a subscription without writing anything.

    Returns:
        dict with the subscription summary, one entry per slot (including
        conflict details) and conflict totals

    Raises:
        ResourceNotFound: client, active barber or active package missing
        ResourceConflict: the client already has an active subscription
        InvalidOperation: duration out of range
    """
    _validate_duration_months(duration_months)
    client, barber, package = _load_enrolment_targets(client_id, barber_id, package_id)

    if conflict_detector.client_has_active_subscription(client.id):
        raise ResourceConflict(
            "Client already has an active subscription. Only one active subscription per client is allowed."
        )

    start_date = _aware(start_date)
    total_duration = package.total_duration_minutes
    interval_days = date_calculator.get_interval_days(package.plan_type)
    end_date = date_calculator.calculate_end_date(start_date, duration_months)
    total_slots = date_calculator.calculate_total_slots(start_date, end_date, interval_days)
    dates = date_calculator.generate_appointment_dates(start_date, total_slots, interval_days)

    checks = conflict_detector.check_slot_conflicts(barber.id, dates, total_duration)

    appointments = [
        {
            'slot_index': check['index'],
            'date': check['date'],
            'barber_id': barber.id,
            'barber_name': barber.name,
            'package_id': package.id,
            'package_name': package.name,
            'duration': total_duration,
            'has_conflict': check['conflict'] is not None,
            'conflict_details': _conflict_details(check['conflict']),
        }
        for check in checks
    ]
    conflict_count = sum(1 for slot in appointments if slot['has_conflict'])

    return {
        'subscription': {
            'plan_type': package.plan_type,
            'start_date': start_date,
            'end_date': end_date,
            'duration_months': duration_months,
            'total_slots': total_slots,
            'interval_days': interval_days,
            'final_price': package.final_price,
        },
        'appointments': appointments,
        'has_any_conflict': conflict_count > 0,
        'conflict_count': conflict_count,
    }


def _apply_adjustments(dates, adjustments):
    adjusted = list(dates)
    for adjustment in adjustments:
        slot_index = adjustment['slot_index']
        if not 0 <= slot_index < len(adjusted):
            raise InvalidOperation(f"Invalid slot index: {slot_index}")
        adjusted[slot_index] = _aware(adjustment['new_date'])
    return adjusted


def _create_slot_appointments(subscription, dates, service_ids, first_index=0):
    appointments = [
        Appointment(
            client_id=subscription.client_id,
            barber_id=subscription.barber_id,
            subscription=subscription,
            is_subscription_based=True,
            subscription_slot_index=first_index + offset,
            date=date,
            status=APPOINTMENT_STATUS_SCHEDULED,
        )
        for offset, date in enumerate(dates)
    ]
    Appointment.objects.bulk_create(appointments)

    AppointmentService.objects.bulk_create([
        AppointmentService(appointment=appointment, service_id=service_id)
        for appointment in appointments
        for service_id in service_ids
    ])
    return appointments


def create_subscription(client_id, barber_id, package_id, start_date, duration_months,
                        notes='', adjustments=None):
    """
    Create a subscription after the preview was confirmed.

    Args:
        adjustments: optional list of {'slot_index', 'new_date', 'reason'}
            moving individual slots away from conflicts

    Returns:
        Subscription instance

    Raises:
        InvalidOperation: conflicts remain after the adjustments
    """
    adjustments = adjustments or []
    preview = preview_subscription(client_id, barber_id, package_id, start_date, duration_months)
    plan = preview['subscription']

    original_dates = [slot['date'] for slot in preview['appointments']]
    final_dates = _apply_adjustments(original_dates, adjustments)

    package = Package.objects.with_services().get(id=package_id)
    total_duration = package.total_duration_minutes

    checks = conflict_detector.check_slot_conflicts(barber_id, final_dates, total_duration)
    if any(check['conflict'] is not None for check in checks):
        raise InvalidOperation(
            "Conflicts remain in the adjusted dates. Please adjust the conflicting slots."
        )

    with transaction.atomic():
        # Serialize enrolments of the same client
        Client.objects.select_for_update().get(id=client_id)
        if conflict_detector.client_has_active_subscription(client_id):
            raise ResourceConflict("Client already has an active subscription.")

        subscription = Subscription.objects.create(
            client_id=client_id,
            barber_id=barber_id,
            package=package,
            plan_type=package.plan_type,
            start_date=plan['start_date'],
            end_date=plan['end_date'],
            duration_months=duration_months,
            total_slots=plan['total_slots'],
            notes=notes or '',
        )

        _create_slot_appointments(
            subscription,
            final_dates,
            [link.service_id for link in package.package_services.all()],
        )

        logs = [
            SubscriptionChangeLog(
                subscription=subscription,
                change_type=CHANGE_TYPE_CREATED,
                description=(
                    f"Assinatura criada com {plan['total_slots']} agendamentos ({package.plan_type})"
                ),
                new_value={
                    'plan_type': package.plan_type,
                    'package_id': str(package.id),
                    'package_name': package.name,
                    'start_date': _iso(plan['start_date']),
                    'end_date': _iso(plan['end_date']),
                    'total_slots': plan['total_slots'],
                },
            )
        ]
        for adjustment in adjustments:
            slot_index = adjustment['slot_index']
            logs.append(SubscriptionChangeLog(
                subscription=subscription,
                change_type=CHANGE_TYPE_APPOINTMENT_ADJUSTED,
                description=f"Agendamento #{slot_index} ajustado durante criação",
                old_value={'date': _iso(original_dates[slot_index])},
                new_value={'date': _iso(final_dates[slot_index])},
                reason=adjustment.get('reason') or '',
            ))
        SubscriptionChangeLog.objects.bulk_create(logs)

        _notify_after_commit(subscription.id, 'created')

    logger.info(
        f"Created subscription {subscription.id} for client {client_id} "
        f"with {plan['total_slots']} slots"
    )
    return get_subscription(subscription.id)


def list_subscriptions(client_id=None, barber_id=None, status=None):
    """
    List subscriptions, newest first, with completed slot counts.
    """
    queryset = Subscription.objects.all()
    if client_id:
        queryset = queryset.filter(client_id=client_id)
    if barber_id:
        queryset = queryset.filter(barber_id=barber_id)
    if status:
        queryset = queryset.filter(status=status)

    return _with_related(queryset).annotate(
        completed_slot_count=Count(
            'appointments',
            filter=Q(appointments__status=APPOINTMENT_STATUS_COMPLETED),
        )
    ).order_by('-created_at')


def get_subscription(subscription_id):
    subscription = _with_related(
        Subscription.objects.filter(id=subscription_id)
    ).prefetch_related(
        Prefetch('appointments', queryset=Appointment.objects.order_by('subscription_slot_index', 'date')),
        Prefetch('change_logs', queryset=SubscriptionChangeLog.objects.order_by('-created_at')),
    ).first()
    if subscription is None:
        raise ResourceNotFound(f"Subscription {subscription_id} not found")
    return subscription


def _lock_subscription(subscription_id):
    subscription = Subscription.objects.select_for_update().filter(id=subscription_id).first()
    if subscription is None:
        raise ResourceNotFound(f"Subscription {subscription_id} not found")
    return subscription


def update_subscription(subscription_id, plan_type=None, notes=None, reason=''):
    """
    Update notes and/or the plan type of an active subscription.

    A plan type change re-spaces the pending slots with the new interval,
    starting from the earliest pending slot.
    """
    subscription = get_subscription(subscription_id)
    if subscription.status != SUBSCRIPTION_STATUS_ACTIVE:
        raise InvalidOperation("Only active subscriptions can be edited")

    if plan_type and plan_type != subscription.plan_type:
        _change_plan_type(subscription, plan_type, reason)

    if notes is not None:
        Subscription.objects.filter(id=subscription.id).update(notes=notes, updated_at=timezone.now())

    return get_subscription(subscription_id)


def _change_plan_type(subscription, new_plan_type, reason):
    pending = list(
        subscription.appointments.filter(
            status__in=PENDING_APPOINTMENT_STATUSES
        ).order_by('date')
    )
    if not pending:
        raise InvalidOperation("There are no pending appointments to reschedule")

    new_dates = date_calculator.recalculate_appointment_dates(
        [appointment.date for appointment in pending], new_plan_type, pending[0].date
    )

    checks = conflict_detector.check_slot_conflicts(
        subscription.barber_id,
        new_dates,
        get_subscription_duration(subscription),
        exclude_ids=[appointment.id for appointment in pending],
    )
    if any(check['conflict'] is not None for check in checks):
        raise InvalidOperation(
            "The new dates conflict with existing appointments. Adjust manually or choose another plan."
        )

    old_plan_type = subscription.plan_type
    with transaction.atomic():
        locked = _lock_subscription(subscription.id)
        locked.plan_type = new_plan_type
        locked.save(update_fields=['plan_type', 'updated_at'])

        for appointment, new_date in zip(pending, new_dates):
            appointment.date = new_date
        Appointment.objects.bulk_update(pending, ['date'])

        SubscriptionChangeLog.objects.create(
            subscription=locked,
            change_type=CHANGE_TYPE_PLAN_CHANGED,
            description=f"Plano alterado de {old_plan_type} para {new_plan_type}",
            old_value={'plan_type': old_plan_type},
            new_value={'plan_type': new_plan_type},
            reason=reason or '',
        )

    logger.info(f"Subscription {subscription.id} plan changed {old_plan_type} -> {new_plan_type}")


def pause_subscription(subscription_id, reason=''):
    """
    Pause an active subscription, cancelling its future scheduled slots.
    """
    with transaction.atomic():
        subscription = _lock_subscription(subscription_id)
        if subscription.status != SUBSCRIPTION_STATUS_ACTIVE:
            raise InvalidOperation("Only active subscriptions can be paused")

        now = timezone.now()
        cancelled = subscription.appointments.filter(
            status=APPOINTMENT_STATUS_SCHEDULED,
            date__gt=now,
        ).update(status=APPOINTMENT_STATUS_CANCELLED, updated_at=now)

        subscription.status = SUBSCRIPTION_STATUS_PAUSED
        subscription.paused_at = now
        subscription.save(update_fields=['status', 'paused_at', 'updated_at'])

        SubscriptionChangeLog.objects.create(
            subscription=subscription,
            change_type=CHANGE_TYPE_PAUSED,
            description=f"Assinatura pausada. {cancelled} agendamentos futuros cancelados.",
            reason=reason or '',
        )

    logger.info(f"Paused subscription {subscription_id} ({cancelled} appointments cancelled)")
    return get_subscription(subscription_id)


def resume_subscription(subscription_id, new_start_date, reason=''):
    """
    Resume a paused subscription from a new start date.

    The remaining slots (total minus completed) are regenerated with the
    subscription's interval; cancelled slots are discarded.
    """
    subscription = get_subscription(subscription_id)
    if subscription.status != SUBSCRIPTION_STATUS_PAUSED:
        raise InvalidOperation("Only paused subscriptions can be resumed")

    completed_count = subscription.appointments.filter(status=APPOINTMENT_STATUS_COMPLETED).count()
    remaining_slots = subscription.total_slots - completed_count
    if remaining_slots <= 0:
        raise InvalidOperation("There are no remaining slots to resume")

    new_start_date = _aware(new_start_date)
    interval_days = date_calculator.get_interval_days(subscription.plan_type)
    new_dates = date_calculator.generate_appointment_dates(new_start_date, remaining_slots, interval_days)

    own_pending = list(
        subscription.appointments.filter(
            status__in=PENDING_APPOINTMENT_STATUSES
        ).values_list('id', flat=True)
    )
    checks = conflict_detector.check_slot_conflicts(
        subscription.barber_id,
        new_dates,
        get_subscription_duration(subscription),
        exclude_ids=own_pending,
    )
    if any(check['conflict'] is not None for check in checks):
        raise InvalidOperation("The new dates have conflicts. Please choose another start date.")

    if subscription.package_id:
        service_ids = [link.service_id for link in subscription.package.package_services.all()]
    elif subscription.service_id:
        service_ids = [subscription.service_id]
    else:
        service_ids = []

    with transaction.atomic():
        locked = _lock_subscription(subscription_id)
        if locked.status != SUBSCRIPTION_STATUS_PAUSED:
            raise InvalidOperation("Only paused subscriptions can be resumed")

        locked.appointments.filter(status=APPOINTMENT_STATUS_CANCELLED).delete()
        _create_slot_appointments(locked, new_dates, service_ids, first_index=completed_count)

        locked.status = SUBSCRIPTION_STATUS_ACTIVE
        locked.paused_at = None
        locked.save(update_fields=['status', 'paused_at', 'updated_at'])

        SubscriptionChangeLog.objects.create(
            subscription=locked,
            change_type=CHANGE_TYPE_RESUMED,
            description=f"Assinatura retomada com {remaining_slots} agendamentos restantes",
            new_value={'new_start_date': _iso(new_start_date), 'remaining_slots': remaining_slots},
            reason=reason or '',
        )

    logger.info(f"Resumed subscription {subscription_id} with {remaining_slots} slots")
    return get_subscription(subscription_id)


def cancel_subscription(subscription_id, reason=''):
    """
    Cancel a subscription and its future pending slots.

    Raises:
        InvalidOperation: subscription is already cancelled or completed
    """
    with transaction.atomic():
        subscription = _lock_subscription(subscription_id)
        if subscription.status not in LIVE_SUBSCRIPTION_STATUSES:
            raise InvalidOperation(
                f"Only active or paused subscriptions can be cancelled (status: {subscription.status})"
            )

        now = timezone.now()
        cancelled = subscription.appointments.filter(
            status__in=[APPOINTMENT_STATUS_SCHEDULED, APPOINTMENT_STATUS_IN_PROGRESS],
            date__gt=now,
        ).update(status=APPOINTMENT_STATUS_CANCELLED, updated_at=now)

        subscription.status = SUBSCRIPTION_STATUS_CANCELLED
        subscription.cancelled_at = now
        subscription.cancellation_reason = reason or ''
        subscription.save(update_fields=['status', 'cancelled_at', 'cancellation_reason', 'updated_at'])

        SubscriptionChangeLog.objects.create(
            subscription=subscription,
            change_type=CHANGE_TYPE_CANCELLED,
            description=f"Assinatura cancelada. {cancelled} agendamentos futuros cancelados.",
            reason=reason or '',
        )

        _notify_after_commit(subscription.id, 'cancelled')

    logger.info(f"Cancelled subscription {subscription_id} ({cancelled} appointments cancelled)")
    return get_subscription(subscription_id)
