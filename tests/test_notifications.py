from unittest import mock

import pytest
import requests

from apps.core.utils.constants import DEACTIVATION_ACTION_CANCEL, DEACTIVATION_ACTION_TRANSFER
from apps.core.utils.phone import format_display, to_whatsapp_id
from apps.notifications import tasks
from apps.notifications.models import Notification, NotificationStatus, NotificationType
from apps.notifications.services import notification_service

from .conftest import BASE_DATE

pytestmark = pytest.mark.django_db


def _response(status_code, payload=None, text=''):
    response = mock.Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


@pytest.fixture
def notification(client_obj):
    return notification_service.create_notification(
        client=client_obj,
        notification_type=NotificationType.MANUAL_MESSAGE,
        message='Olá',
        send_now=False,
    )


def test_to_whatsapp_id():
    assert to_whatsapp_id('(34) 99123-4567') == '5534991234567@c.us'
    assert to_whatsapp_id('5534991234567@c.us') == '5534991234567@c.us'


def test_format_display():
    assert format_display('34991234567') == '(34) 99123-4567'


def test_create_notification_uses_whatsapp_id(notification):
    assert notification.phone_number == '5534991234567@c.us'
    assert notification.status == NotificationStatus.PENDING


def test_scheduled_notification_waits(client_obj):
    notification = notification_service.create_notification(
        client=client_obj,
        notification_type=NotificationType.REMINDER_MORNING,
        message='Lembrete',
        scheduled_for=BASE_DATE,
    )

    assert notification.status == NotificationStatus.SCHEDULED


@mock.patch('apps.notifications.services.whatsapp_client.requests.post')
def test_process_notification_sent(post, notification):
    post.return_value = _response(201, {'id': 'msg-1'})

    result = notification_service.process_notification(notification.id)

    assert result.status == NotificationStatus.SENT
    assert result.attempts == 1
    assert result.sent_at is not None
    assert post.call_args.kwargs['json'] == {'chatId': '5534991234567@c.us', 'message': 'Olá'}


@mock.patch('apps.notifications.services.whatsapp_client.requests.post')
def test_process_notification_failure_stays_pending(post, notification):
    post.return_value = _response(500, text='gateway down')

    result = notification_service.process_notification(notification.id)

    assert result.status == NotificationStatus.PENDING
    assert result.attempts == 1
    assert 'HTTP 500' in result.error_message


@mock.patch('apps.notifications.services.whatsapp_client.requests.post')
def test_process_notification_fails_after_last_attempt(post, notification):
    post.side_effect = requests.ConnectionError('refused')
    Notification.objects.filter(id=notification.id).update(attempts=2)

    result = notification_service.process_notification(notification.id)

    assert result.status == NotificationStatus.FAILED
    assert result.attempts == 3


@mock.patch('apps.notifications.services.whatsapp_client.requests.post')
def test_process_pending_skips_exhausted(post, notification, client_obj):
    post.return_value = _response(200, {'id': 'msg-2'})
    exhausted = notification_service.create_notification(
        client=client_obj,
        notification_type=NotificationType.MANUAL_MESSAGE,
        message='Tarde demais',
        send_now=False,
    )
    Notification.objects.filter(id=exhausted.id).update(attempts=3)

    processed = notification_service.process_pending_notifications()

    assert processed == 1
    notification.refresh_from_db()
    assert notification.status == NotificationStatus.SENT


def test_create_notification_dispatches_after_commit(client_obj, django_capture_on_commit_callbacks):
    with mock.patch('apps.notifications.tasks.send_notification_task.delay') as delay:
        with django_capture_on_commit_callbacks(execute=True):
            notification = notification_service.create_notification(
                client=client_obj,
                notification_type=NotificationType.MANUAL_MESSAGE,
                message='Olá',
            )

    delay.assert_called_once_with(str(notification.id))


@pytest.mark.parametrize('action, notification_type', [
    (DEACTIVATION_ACTION_TRANSFER, NotificationType.BARBER_TRANSFERRED),
    (DEACTIVATION_ACTION_CANCEL, NotificationType.APPOINTMENT_CANCELLED),
])
def test_barber_deactivation_task_queues_messages(
    action, notification_type, client_obj, barber, service_a, make_appointment
):
    appointment = make_appointment(client_obj, barber, BASE_DATE, service=service_a)

    with mock.patch('apps.notifications.tasks.send_notification_task.delay'):
        sent = tasks.notify_barber_deactivation_task(
            [str(appointment.id)], action
        )

    assert sent == 1
    notification = Notification.objects.get(appointment=appointment)
    assert notification.notification_type == notification_type
    assert client_obj.name in notification.message


def test_subscription_event_task_unknown_subscription():
    assert tasks.notify_subscription_event_task('00000000-0000-0000-0000-000000000000', 'created') is None
    assert not Notification.objects.exists()
