"""
Celery tasks for WhatsApp notifications.
Handles async sending and the periodic processing of queued messages.
"""
import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_notification_task(self, notification_id: str):
    """
    Async task to deliver a single notification.

    Args:
        notification_id: Notification UUID
    """
    from apps.notifications.services.notification_service import process_notification

    try:
        notification = process_notification(notification_id)
        logger.info(f"Notification task completed: {notification_id} ({notification.status})")
    except Exception as e:
        logger.error(f"Notification task failed: {notification_id}: {e}")
        raise self.retry(exc=e)


@shared_task
def process_notifications_task():
    """
    Periodic task that sends due scheduled notifications and retries
    pending ones. Runs every minute via Celery Beat.
    """
    from apps.notifications.services.notification_service import (
        process_pending_notifications,
        process_scheduled_notifications,
    )

    scheduled = process_scheduled_notifications()
    pending = process_pending_notifications()

    logger.info(f"Notification processing complete: {scheduled} scheduled, {pending} pending")
    return {'scheduled': scheduled, 'pending': pending}


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_subscription_event_task(self, subscription_id: str, event: str):
    """
    Tell the client about a subscription lifecycle event.

    Args:
        subscription_id: Subscription UUID
        event: 'created' or 'cancelled'
    """
    from apps.subscriptions.models import Subscription
    from apps.notifications.services.notification_service import (
        notify_subscription_cancelled,
        notify_subscription_created,
    )

    handlers = {
        'created': notify_subscription_created,
        'cancelled': notify_subscription_cancelled,
    }
    handler = handlers.get(event)
    if handler is None:
        logger.warning(f"Unknown subscription event '{event}' for {subscription_id}")
        return

    try:
        subscription = Subscription.objects.select_related('client', 'barber').get(id=subscription_id)
    except Subscription.DoesNotExist:
        logger.warning(f"Subscription {subscription_id} not found for notification")
        return

    try:
        handler(subscription)
    except Exception as e:
        logger.error(f"Subscription notification failed for {subscription_id}: {e}")
        raise self.retry(exc=e)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_barber_deactivation_task(self, appointment_ids: list, action: str):
    """
    Notify clients whose pending appointments were moved or cancelled
    when a barber was deactivated.

    Args:
        appointment_ids: Affected appointment UUIDs
        action: 'transfer' or 'cancel'
    """
    from apps.appointments.models import Appointment
    from apps.core.utils.constants import DEACTIVATION_ACTION_TRANSFER
    from apps.notifications.services.notification_service import (
        notify_appointment_cancelled,
        notify_barber_transferred,
    )

    appointments = Appointment.objects.filter(
        id__in=appointment_ids
    ).select_related('client', 'barber')

    sent_count = 0
    for appointment in appointments:
        try:
            if action == DEACTIVATION_ACTION_TRANSFER:
                notify_barber_transferred(appointment)
            else:
                notify_appointment_cancelled(appointment)
            sent_count += 1
        except Exception as e:
            logger.error(f"Failed to notify client for appointment {appointment.id}: {e}")

    logger.info(f"Barber deactivation notifications queued: {sent_count}/{len(appointment_ids)}")
    return sent_count
