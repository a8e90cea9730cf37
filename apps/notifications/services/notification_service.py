"""
Notification service.
Builds WhatsApp messages, queues them and delivers them through the gateway.
"""
import logging
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.core.exceptions import ResourceNotFound
from apps.core.utils.constants import PLAN_TYPE_LABELS_PT
from apps.core.utils.phone import to_whatsapp_id
from apps.notifications.models import Notification, NotificationStatus, NotificationType
from apps.notifications.services.whatsapp_client import get_whatsapp_client

logger = logging.getLogger(__name__)


def _format_datetime(value) -> str:
    return timezone.localtime(value).strftime('%d/%m/%Y às %H:%M')


class MessageTemplates:
    """WhatsApp message bodies (pt-BR)"""

    @staticmethod
    def appointment_created(client_name, date, barber_name, service_name):
        return (
            f"Olá {client_name}! ✂️\n\n"
            f"Seu agendamento foi confirmado:\n"
            f"📅 {_format_datetime(date)}\n"
            f"💈 Barbeiro: {barber_name}\n"
            f"✨ Serviço: {service_name}\n\n"
            f"Aguardamos você!"
        )

    @staticmethod
    def appointment_cancelled(client_name, date):
        return (
            f"{client_name}, seu agendamento do dia {_format_datetime(date)} foi cancelado. ❌\n\n"
            f"Se precisar reagendar, estamos à disposição!"
        )

    @staticmethod
    def barber_transferred(client_name, date, barber_name):
        return (
            f"{client_name}, seu agendamento do dia {_format_datetime(date)} "
            f"agora será com {barber_name}. 🔄\n\n"
            f"Qualquer dúvida, entre em contato!"
        )

    @staticmethod
    def subscription_created(client_name, plan_type, total_slots, barber_name):
        plan_label = PLAN_TYPE_LABELS_PT.get(plan_type, plan_type).lower()
        return (
            f"Olá {client_name}! 🎉\n\n"
            f"Sua assinatura {plan_label} foi criada com sucesso!\n\n"
            f"Você tem {total_slots} agendamentos programados com {barber_name}.\n\n"
            f"Obrigado pela preferência!"
        )

    @staticmethod
    def subscription_cancelled(client_name):
        return (
            f"{client_name}, sua assinatura foi cancelada e os próximos "
            f"agendamentos foram desmarcados.\n\n"
            f"Se quiser voltar, estamos à disposição!"
        )

    @staticmethod
    def custom_message(client_name, message):
        return f"Olá {client_name}!\n\n{message}"


def create_notification(
    client,
    notification_type: str,
    message: str,
    appointment=None,
    scheduled_for=None,
    send_now: bool = True,
) -> Notification:
    """
    Queue a WhatsApp notification for a client.

    Immediate notifications are handed to the send task once the
    surrounding transaction commits.

    Args:
        client: Client instance
        notification_type: NotificationType value
        message: Message body
        appointment: Optional related Appointment
        scheduled_for: Optional datetime; the message waits until then
        send_now: Dispatch the send task for immediate notifications
    """
    from apps.notifications.tasks import send_notification_task

    notification = Notification.objects.create(
        client=client,
        appointment=appointment,
        notification_type=notification_type,
        message=message,
        phone_number=to_whatsapp_id(client.phone),
        scheduled_for=scheduled_for,
        status=NotificationStatus.SCHEDULED if scheduled_for else NotificationStatus.PENDING,
    )

    logger.info(f"Notification created: {notification.id} ({notification_type})")

    if send_now and not scheduled_for:
        notification_id = str(notification.id)
        transaction.on_commit(lambda: send_notification_task.delay(notification_id))

    return notification


def process_notification(notification_id) -> Optional[Notification]:
    """
    Deliver a notification through the WhatsApp gateway.

    Raises:
        ResourceNotFound: notification does not exist
    """
    notification = Notification.objects.filter(id=notification_id).first()
    if notification is None:
        raise ResourceNotFound(f"Notification {notification_id} not found")

    if notification.status == NotificationStatus.SENT:
        return notification

    if notification.attempts >= notification.max_attempts:
        logger.warning(f"Notification {notification_id} exceeded max attempts")
        notification.status = NotificationStatus.FAILED
        notification.error_message = 'Max retry attempts exceeded'
        notification.save(update_fields=['status', 'error_message', 'updated_at'])
        return notification

    result = get_whatsapp_client().send_message(notification.phone_number, notification.message)
    notification.attempts += 1

    if result['success']:
        notification.status = NotificationStatus.SENT
        notification.sent_at = timezone.now()
        notification.error_message = ''
        logger.info(f"Notification {notification_id} sent successfully")
    else:
        if notification.attempts >= notification.max_attempts:
            notification.status = NotificationStatus.FAILED
        else:
            notification.status = NotificationStatus.PENDING
        notification.error_message = result['error'] or ''
        logger.error(f"Failed to send notification {notification_id}: {result['error']}")

    notification.save(update_fields=[
        'status', 'sent_at', 'attempts', 'error_message', 'updated_at'
    ])
    return notification


def _batch_size() -> int:
    return getattr(settings, 'NOTIFICATION_BATCH_SIZE', 50)


def process_pending_notifications() -> int:
    """Retry pending notifications that still have attempts left"""
    pending = list(
        Notification.objects.filter(
            status=NotificationStatus.PENDING,
            attempts__lt=F('max_attempts'),
        ).order_by('created_at')[:_batch_size()]
    )

    logger.info(f"Processing {len(pending)} pending notifications")

    for notification in pending:
        try:
            process_notification(notification.id)
        except Exception as e:
            logger.error(f"Failed to process notification {notification.id}: {e}")

    return len(pending)


def process_scheduled_notifications() -> int:
    """Send scheduled notifications that are due"""
    due = list(
        Notification.objects.filter(
            status=NotificationStatus.SCHEDULED,
            scheduled_for__lte=timezone.now(),
        ).order_by('scheduled_for')[:_batch_size()]
    )

    logger.info(f"Processing {len(due)} scheduled notifications")

    for notification in due:
        try:
            Notification.objects.filter(id=notification.id).update(status=NotificationStatus.PENDING)
            process_notification(notification.id)
        except Exception as e:
            logger.error(f"Failed to process scheduled notification {notification.id}: {e}")

    return len(due)


def notify_subscription_created(subscription):
    """Confirmation message after a subscription is created"""
    client = subscription.client
    return create_notification(
        client=client,
        notification_type=NotificationType.SUBSCRIPTION_CREATED,
        message=MessageTemplates.subscription_created(
            client.name,
            subscription.plan_type,
            subscription.total_slots,
            subscription.barber.name,
        ),
    )


def notify_subscription_cancelled(subscription):
    client = subscription.client
    return create_notification(
        client=client,
        notification_type=NotificationType.SUBSCRIPTION_CANCELLED,
        message=MessageTemplates.subscription_cancelled(client.name),
    )


def notify_appointment_cancelled(appointment):
    client = appointment.client
    return create_notification(
        client=client,
        appointment=appointment,
        notification_type=NotificationType.APPOINTMENT_CANCELLED,
        message=MessageTemplates.appointment_cancelled(client.name, appointment.date),
    )


def notify_barber_transferred(appointment):
    client = appointment.client
    return create_notification(
        client=client,
        appointment=appointment,
        notification_type=NotificationType.BARBER_TRANSFERRED,
        message=MessageTemplates.barber_transferred(
            client.name, appointment.date, appointment.barber.name
        ),
    )
