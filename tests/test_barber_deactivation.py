import uuid
from unittest import mock

import pytest
from django.utils import timezone
from datetime import timedelta

from apps.appointments.models import Appointment
from apps.barbers import services as barber_services
from apps.barbers.models import Barber, BarberService
from apps.core.exceptions import InvalidOperation, ResourceNotFound
from apps.core.utils.constants import (
    APPOINTMENT_STATUS_CANCELLED,
    APPOINTMENT_STATUS_COMPLETED,
    APPOINTMENT_STATUS_IN_PROGRESS,
    APPOINTMENT_STATUS_SCHEDULED,
    CHANGE_TYPE_BARBER_TRANSFERRED,
    CHANGE_TYPE_CANCELLED,
    SUBSCRIPTION_STATUS_ACTIVE,
    SUBSCRIPTION_STATUS_CANCELLED,
    SUBSCRIPTION_STATUS_PAUSED,
)
from apps.subscriptions.models import Subscription, SubscriptionChangeLog

pytestmark = pytest.mark.django_db


@pytest.fixture
def pending_work(barber, client_obj, other_client, package, service_a,
                 make_subscription, make_appointment, future):
    """
    Barber with 2 pending future appointments, 1 active and 1 paused
    subscription, plus history that must not be touched.
    """
    active_sub = make_subscription(client_obj, barber, package=package)
    paused_sub = make_subscription(other_client, barber, package=package, status=SUBSCRIPTION_STATUS_PAUSED)
    cancelled_sub = make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_CANCELLED)

    scheduled = make_appointment(client_obj, barber, future(days=2), service=service_a, subscription=active_sub)
    in_progress = make_appointment(
        other_client, barber, future(hours=1), service=service_a, status=APPOINTMENT_STATUS_IN_PROGRESS
    )
    past = make_appointment(client_obj, barber, timezone.now() - timedelta(days=3), service=service_a)
    completed = make_appointment(
        client_obj, barber, future(days=1), service=service_a, status=APPOINTMENT_STATUS_COMPLETED
    )

    return {
        'active_sub': active_sub,
        'paused_sub': paused_sub,
        'cancelled_sub': cancelled_sub,
        'scheduled': scheduled,
        'in_progress': in_progress,
        'past': past,
        'completed': completed,
    }


def test_self_transfer_rejected_regardless_of_state():
    barber_id = uuid.uuid4()

    with pytest.raises(InvalidOperation):
        barber_services.deactivate_with_action(barber_id, 'transfer', barber_id)


def test_self_transfer_rejected_for_existing_barber(barber):
    with pytest.raises(InvalidOperation):
        barber_services.deactivate_with_action(barber.id, 'transfer', str(barber.id))

    barber.refresh_from_db()
    assert barber.is_active is True


def test_transfer_without_target_rejected(barber):
    with pytest.raises(InvalidOperation):
        barber_services.deactivate_with_action(barber.id, 'transfer')


def test_unknown_action_rejected(barber):
    with pytest.raises(InvalidOperation):
        barber_services.deactivate_with_action(barber.id, 'archive')


def test_missing_barber_not_found(other_barber):
    with pytest.raises(ResourceNotFound):
        barber_services.deactivate_with_action(uuid.uuid4(), 'transfer', other_barber.id)


def test_inactive_target_not_found(barber, other_barber, pending_work):
    other_barber.is_active = False
    other_barber.save()

    with pytest.raises(ResourceNotFound):
        barber_services.deactivate_with_action(barber.id, 'transfer', other_barber.id)

    barber.refresh_from_db()
    assert barber.is_active is True
    assert Appointment.objects.filter(barber=barber, status=APPOINTMENT_STATUS_SCHEDULED).count() == 2


def test_missing_target_not_found(barber):
    with pytest.raises(ResourceNotFound):
        barber_services.deactivate_with_action(barber.id, 'transfer', uuid.uuid4())


def test_transfer_moves_pending_work(barber, other_barber, pending_work):
    result = barber_services.deactivate_with_action(barber.id, 'transfer', other_barber.id)

    assert result['appointments_affected'] == 2
    assert result['subscriptions_affected'] == 2
    assert result['action'] == 'transfer'
    assert result['target_barber_id'] == other_barber.id
    assert result['barber'].is_active is False

    for key in ('scheduled', 'in_progress'):
        pending_work[key].refresh_from_db()
        assert pending_work[key].barber_id == other_barber.id

    for key in ('active_sub', 'paused_sub'):
        pending_work[key].refresh_from_db()
        assert pending_work[key].barber_id == other_barber.id

    # History stays with the deactivated barber
    for key in ('past', 'completed'):
        pending_work[key].refresh_from_db()
        assert pending_work[key].barber_id == barber.id

    pending_work['cancelled_sub'].refresh_from_db()
    assert pending_work['cancelled_sub'].barber_id == barber.id
    assert pending_work['cancelled_sub'].status == SUBSCRIPTION_STATUS_CANCELLED

    assert SubscriptionChangeLog.objects.filter(change_type=CHANGE_TYPE_BARBER_TRANSFERRED).count() == 2
    barber.refresh_from_db()
    assert barber.is_active is False


def test_cancel_cancels_pending_work(barber, pending_work):
    result = barber_services.deactivate_with_action(barber.id, 'cancel')

    assert result['appointments_affected'] == 2
    assert result['subscriptions_affected'] == 2
    assert result['target_barber_id'] is None

    for key in ('scheduled', 'in_progress'):
        pending_work[key].refresh_from_db()
        assert pending_work[key].status == APPOINTMENT_STATUS_CANCELLED

    pending_work['completed'].refresh_from_db()
    assert pending_work['completed'].status == APPOINTMENT_STATUS_COMPLETED
    pending_work['past'].refresh_from_db()
    assert pending_work['past'].status == APPOINTMENT_STATUS_SCHEDULED

    for key in ('active_sub', 'paused_sub'):
        subscription = Subscription.objects.get(id=pending_work[key].id)
        assert subscription.status == SUBSCRIPTION_STATUS_CANCELLED
        assert subscription.cancelled_at is not None
        assert subscription.cancellation_reason == barber_services.DEACTIVATION_CANCEL_REASON

    assert SubscriptionChangeLog.objects.filter(change_type=CHANGE_TYPE_CANCELLED).count() == 2
    barber.refresh_from_db()
    assert barber.is_active is False


def test_cancel_ignores_target(barber, other_barber):
    result = barber_services.deactivate_with_action(barber.id, 'cancel', other_barber.id)

    assert result['target_barber_id'] is None
    assert result['appointments_affected'] == 0


def test_failure_inside_transaction_rolls_back(barber, other_barber, pending_work):
    with mock.patch(
        'apps.barbers.services.subscription_service.reassign_barber',
        side_effect=RuntimeError('boom'),
    ):
        with pytest.raises(RuntimeError):
            barber_services.deactivate_with_action(barber.id, 'transfer', other_barber.id)

    barber.refresh_from_db()
    assert barber.is_active is True
    pending_work['scheduled'].refresh_from_db()
    assert pending_work['scheduled'].barber_id == barber.id
    pending_work['active_sub'].refresh_from_db()
    assert pending_work['active_sub'].barber_id == barber.id


def test_failure_in_cancel_rolls_back(barber, pending_work):
    with mock.patch(
        'apps.barbers.services.subscription_service.cancel_all',
        side_effect=RuntimeError('boom'),
    ):
        with pytest.raises(RuntimeError):
            barber_services.deactivate_with_action(barber.id, 'cancel')

    pending_work['scheduled'].refresh_from_db()
    assert pending_work['scheduled'].status == APPOINTMENT_STATUS_SCHEDULED
    barber.refresh_from_db()
    assert barber.is_active is True


def test_clients_notified_after_commit(barber, other_barber, pending_work, django_capture_on_commit_callbacks):
    with mock.patch('apps.notifications.tasks.notify_barber_deactivation_task.delay') as delay:
        with django_capture_on_commit_callbacks(execute=True):
            barber_services.deactivate_with_action(barber.id, 'transfer', other_barber.id)

    delay.assert_called_once()
    appointment_ids, action = delay.call_args.args
    assert set(appointment_ids) == {str(pending_work['scheduled'].id), str(pending_work['in_progress'].id)}
    assert action == 'transfer'


def test_get_pending_appointments(barber, pending_work):
    pending = barber_services.get_pending_appointments(barber.id)

    assert {a.id for a in pending['appointments']} == {
        pending_work['scheduled'].id, pending_work['in_progress'].id
    }
    assert {s.id for s in pending['subscriptions']} == {
        pending_work['active_sub'].id, pending_work['paused_sub'].id
    }


def test_get_pending_appointments_not_found(db):
    with pytest.raises(ResourceNotFound):
        barber_services.get_pending_appointments(uuid.uuid4())


def test_assign_and_remove_service(barber, service_a):
    barber_services.assign_service(barber.id, service_a.id)
    barber_services.assign_service(barber.id, service_a.id)

    assert BarberService.objects.filter(barber=barber).count() == 1

    barber_services.remove_service(barber.id, service_a.id)
    assert not BarberService.objects.filter(barber=barber).exists()

    with pytest.raises(ResourceNotFound):
        barber_services.remove_service(barber.id, service_a.id)


def test_assign_inactive_service_not_found(barber, inactive_service):
    with pytest.raises(ResourceNotFound):
        barber_services.assign_service(barber.id, inactive_service.id)


def test_deactivated_barber_stays_inactive(barber):
    barber_services.deactivate_with_action(barber.id, 'cancel')

    assert not Barber.objects.active().filter(id=barber.id).exists()
