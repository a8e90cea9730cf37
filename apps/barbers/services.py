"""
Barber services for handling barber lifecycle business logic
"""
import logging

from django.db import transaction
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.barbers.models import Barber, BarberService
from apps.core.exceptions import InvalidOperation, ResourceNotFound
from apps.core.utils.constants import (
    APPOINTMENT_STATUS_CANCELLED,
    DEACTIVATION_ACTION_CANCEL,
    DEACTIVATION_ACTION_TRANSFER,
    PENDING_APPOINTMENT_STATUSES,
)
from apps.services.models import Service
from apps.subscriptions import subscription_service

logger = logging.getLogger(__name__)

DEACTIVATION_CANCEL_REASON = 'Barbeiro desativado'


def get_barber(barber_id) -> Barber:
    barber = Barber.objects.filter(id=barber_id).first()
    if barber is None:
        raise ResourceNotFound(f"Barber {barber_id} not found")
    return barber


def _pending_appointments(barber_id, now):
    return Appointment.objects.filter(
        barber_id=barber_id,
        status__in=PENDING_APPOINTMENT_STATUSES,
        date__gte=now,
    )


def get_pending_appointments(barber_id) -> dict:
    """
    Pending work of a barber.

    Args:
        barber_id: Barber id

    Returns:
        {'appointments': [...], 'subscriptions': [...]} where appointments
        are scheduled/in progress from now on and subscriptions are
        active or paused
    """
    get_barber(barber_id)

    appointments = _pending_appointments(barber_id, timezone.now()).select_related(
        'client', 'service'
    ).prefetch_related(
        'appointment_services__service'
    ).order_by('date')

    subscriptions = subscription_service.find_active_or_paused_by_barber(barber_id)

    return {
        'appointments': list(appointments),
        'subscriptions': list(subscriptions),
    }


def deactivate_with_action(barber_id, action: str, target_barber_id=None) -> dict:
    """
    Deactivate a barber, transferring or cancelling their pending work.

    All writes happen in one transaction: appointments, subscriptions and
    the barber flag either all change or none do.

    Args:
        barber_id: Barber being deactivated
        action: 'transfer' or 'cancel'
        target_barber_id: Active barber receiving the work (transfer only)

    Returns:
        dict with barber, appointments_affected, subscriptions_affected,
        action and target_barber_id

    Raises:
        InvalidOperation: unknown action, missing target or self-transfer
        ResourceNotFound: barber missing, or target missing/inactive
    """
    if action not in (DEACTIVATION_ACTION_TRANSFER, DEACTIVATION_ACTION_CANCEL):
        raise InvalidOperation(f"Invalid action: {action}")

    if action == DEACTIVATION_ACTION_TRANSFER:
        if not target_barber_id:
            raise InvalidOperation("target_barber_id is required for transfer")
        if str(target_barber_id) == str(barber_id):
            raise InvalidOperation("Cannot transfer to the same barber")
    else:
        target_barber_id = None

    barber = get_barber(barber_id)

    if target_barber_id is not None:
        if not Barber.objects.active().filter(id=target_barber_id).exists():
            raise ResourceNotFound(f"Target barber {target_barber_id} not found or inactive")

    now = timezone.now()
    appointments_affected = _pending_appointments(barber.id, now).count()

    with transaction.atomic():
        barber = Barber.objects.select_for_update().get(id=barber.id)

        if target_barber_id is not None:
            # Target may have been deactivated since the check above
            target = Barber.objects.select_for_update().filter(id=target_barber_id).first()
            if target is None or not target.is_active:
                raise ResourceNotFound(f"Target barber {target_barber_id} not found or inactive")

        pending = _pending_appointments(barber.id, now)
        appointment_ids = [str(appointment_id) for appointment_id in pending.values_list('id', flat=True)]

        if action == DEACTIVATION_ACTION_TRANSFER:
            pending.update(barber_id=target_barber_id, updated_at=now)
        else:
            pending.update(status=APPOINTMENT_STATUS_CANCELLED, updated_at=now)

        subscription_ids = list(
            subscription_service.live_subscriptions_of_barber(barber.id).values_list('id', flat=True)
        )
        if action == DEACTIVATION_ACTION_TRANSFER:
            subscriptions_affected = subscription_service.reassign_barber(
                subscription_ids,
                target_barber_id,
                reason=f"Barbeiro {barber.name} desativado",
            )
        else:
            subscriptions_affected = subscription_service.cancel_all(
                subscription_ids, DEACTIVATION_CANCEL_REASON
            )

        barber.is_active = False
        barber.save(update_fields=['is_active', 'updated_at'])

        if appointment_ids:
            _notify_clients_after_commit(appointment_ids, action)

    logger.info(
        f"Deactivated barber {barber.id} with action '{action}': "
        f"{appointments_affected} appointments, {subscriptions_affected} subscriptions"
    )

    return {
        'barber': barber,
        'appointments_affected': appointments_affected,
        'subscriptions_affected': subscriptions_affected,
        'action': action,
        'target_barber_id': target_barber_id,
    }


def _notify_clients_after_commit(appointment_ids, action):
    from apps.notifications.tasks import notify_barber_deactivation_task

    transaction.on_commit(lambda: notify_barber_deactivation_task.delay(appointment_ids, action))


def assign_service(barber_id, service_id) -> BarberService:
    """
    Let a barber provide a service.

    Raises:
        ResourceNotFound: barber or active service missing
    """
    barber = get_barber(barber_id)
    service = Service.objects.active().filter(id=service_id).first()
    if service is None:
        raise ResourceNotFound(f"Service {service_id} not found or inactive")

    link, created = BarberService.objects.get_or_create(barber=barber, service=service)
    if created:
        logger.info(f"Assigned service {service.id} to barber {barber.id}")
    return link


def remove_service(barber_id, service_id) -> None:
    barber = get_barber(barber_id)
    deleted, _ = BarberService.objects.filter(barber=barber, service_id=service_id).delete()
    if not deleted:
        raise ResourceNotFound(f"Service {service_id} is not assigned to barber {barber_id}")
    logger.info(f"Removed service {service_id} from barber {barber.id}")
