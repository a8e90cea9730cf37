import uuid
from datetime import timedelta

import pytest
from rest_framework.test import APIClient

from apps.appointments.models import Appointment, AppointmentService
from apps.core.utils.constants import SUBSCRIPTION_STATUS_PAUSED
from apps.packages.models import Package

from .conftest import BASE_DATE

pytestmark = pytest.mark.django_db


def test_unauthenticated_request_rejected(package):
    response = APIClient().get('/api/v1/packages/')

    assert response.status_code in (401, 403)


def test_create_package(api_client, service_a, service_b):
    response = api_client.post('/api/v1/packages/', {
        'name': 'Corte + Barba',
        'plan_type': 'weekly',
        'service_ids': [str(service_a.id), str(service_b.id)],
        'discount_amount': '10.00',
    }, format='json')

    assert response.status_code == 201
    assert response.data['base_price'] == '80.00'
    assert response.data['final_price'] == '70.00'
    assert [s['name'] for s in response.data['services']] == ['Corte', 'Barba']


def test_create_package_discount_too_high(api_client, service_a):
    response = api_client.post('/api/v1/packages/', {
        'name': 'Só Corte',
        'plan_type': 'weekly',
        'service_ids': [str(service_a.id)],
        'discount_amount': '50.00',
    }, format='json')

    assert response.status_code == 400
    assert response.data['error'] is True
    assert response.data['status_code'] == 400
    assert Package.objects.count() == 0


def test_create_package_field_errors(api_client):
    response = api_client.post('/api/v1/packages/', {'name': 'Sem serviços'}, format='json')

    assert response.status_code == 400
    assert 'service_ids' in response.data['errors']


def test_list_packages_filter(api_client, package):
    response = api_client.get('/api/v1/packages/', {'is_active': 'true'})

    assert response.status_code == 200
    assert [p['id'] for p in response.data] == [str(package.id)]


def test_retrieve_unknown_package_404(api_client):
    response = api_client.get(f'/api/v1/packages/{uuid.uuid4()}/')

    assert response.status_code == 404
    assert response.data['error'] is True


def test_delete_package_in_use_409(api_client, package, client_obj, barber, make_subscription):
    make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_PAUSED)

    response = api_client.delete(f'/api/v1/packages/{package.id}/')

    assert response.status_code == 409
    package.refresh_from_db()
    assert package.is_active is True


def test_delete_unused_package_deactivates(api_client, package):
    response = api_client.delete(f'/api/v1/packages/{package.id}/')

    assert response.status_code == 200
    assert response.data['is_active'] is False


def test_subscriptions_count(api_client, package, client_obj, barber, make_subscription):
    make_subscription(client_obj, barber, package=package)

    response = api_client.get(f'/api/v1/packages/{package.id}/subscriptions-count/')

    assert response.status_code == 200
    assert response.data['active_subscriptions'] == 1


def test_deactivate_barber_self_transfer_400(api_client, barber):
    response = api_client.post(
        f'/api/v1/barbers/{barber.id}/deactivate/',
        {'action': 'transfer', 'target_barber_id': str(barber.id)},
        format='json',
    )

    assert response.status_code == 400
    barber.refresh_from_db()
    assert barber.is_active is True


def test_deactivate_barber_transfer(api_client, barber, other_barber, client_obj, service_a,
                                    make_appointment, future):
    appointment = make_appointment(client_obj, barber, future(days=1), service=service_a)

    response = api_client.post(
        f'/api/v1/barbers/{barber.id}/deactivate/',
        {'action': 'transfer', 'target_barber_id': str(other_barber.id)},
        format='json',
    )

    assert response.status_code == 200
    assert response.data['appointments_affected'] == 1
    assert response.data['barber']['is_active'] is False
    appointment.refresh_from_db()
    assert appointment.barber_id == other_barber.id


def test_delete_barber_not_allowed(api_client, barber):
    response = api_client.delete(f'/api/v1/barbers/{barber.id}/')

    assert response.status_code == 405


def test_pending_appointments(api_client, barber, client_obj, service_a, make_appointment, future):
    make_appointment(client_obj, barber, future(days=1), service=service_a)

    response = api_client.get(f'/api/v1/barbers/{barber.id}/pending-appointments/')

    assert response.status_code == 200
    assert len(response.data['appointments']) == 1
    assert response.data['subscriptions'] == []


def test_subscription_preview_and_create(api_client, client_obj, barber, package):
    payload = {
        'client_id': str(client_obj.id),
        'barber_id': str(barber.id),
        'package_id': str(package.id),
        'start_date': BASE_DATE.isoformat(),
        'duration_months': 1,
    }

    preview = api_client.post('/api/v1/subscriptions/preview/', payload, format='json')

    assert preview.status_code == 200
    assert preview.data['subscription']['total_slots'] == 5
    assert preview.data['subscription']['final_price'] == '70.00'
    assert preview.data['has_any_conflict'] is False

    created = api_client.post('/api/v1/subscriptions/', payload, format='json')

    assert created.status_code == 201
    assert len(created.data['appointments']) == 5
    assert Appointment.objects.filter(subscription_id=created.data['id']).count() == 5

    again = api_client.post('/api/v1/subscriptions/preview/', payload, format='json')
    assert again.status_code == 409


def test_subscription_pause_and_cancel(api_client, client_obj, barber, package):
    payload = {
        'client_id': str(client_obj.id),
        'barber_id': str(barber.id),
        'package_id': str(package.id),
        'start_date': (BASE_DATE + timedelta(days=1)).isoformat(),
        'duration_months': 1,
    }
    subscription_id = api_client.post('/api/v1/subscriptions/', payload, format='json').data['id']

    paused = api_client.post(f'/api/v1/subscriptions/{subscription_id}/pause/', {}, format='json')
    assert paused.status_code == 200
    assert paused.data['status'] == 'paused'

    cancelled = api_client.post(
        f'/api/v1/subscriptions/{subscription_id}/cancel/', {'reason': 'Desistiu'}, format='json'
    )
    assert cancelled.status_code == 200
    assert cancelled.data['status'] == 'cancelled'

    twice = api_client.post(f'/api/v1/subscriptions/{subscription_id}/cancel/', {}, format='json')
    assert twice.status_code == 400


def test_patch_appointment_service_replaces_link(api_client, client_obj, barber, service_a, service_b):
    created = api_client.post('/api/v1/appointments/', {
        'client': str(client_obj.id),
        'barber': str(barber.id),
        'service': str(service_a.id),
        'date': BASE_DATE.isoformat(),
    }, format='json')
    assert created.status_code == 201

    response = api_client.patch(
        f"/api/v1/appointments/{created.data['id']}/", {'service': str(service_b.id)}, format='json'
    )

    assert response.status_code == 200
    assert list(
        AppointmentService.objects.filter(appointment_id=created.data['id']).values_list('service_id', flat=True)
    ) == [service_b.id]
    assert Appointment.objects.get(id=created.data['id']).duration_minutes == 20


def test_patch_appointment_service_checks_new_duration(api_client, client_obj, other_client, barber,
                                                       service_a, service_b, make_appointment):
    appointment = make_appointment(client_obj, barber, BASE_DATE, service=service_b)
    make_appointment(other_client, barber, BASE_DATE + timedelta(minutes=25), service=service_b)

    response = api_client.patch(
        f'/api/v1/appointments/{appointment.id}/', {'service': str(service_a.id)}, format='json'
    )

    assert response.status_code == 400
    assert list(
        AppointmentService.objects.filter(appointment=appointment).values_list('service_id', flat=True)
    ) == [service_b.id]


def test_patch_subscription_slot_service_rejected(api_client, client_obj, barber, package, service_a):
    payload = {
        'client_id': str(client_obj.id),
        'barber_id': str(barber.id),
        'package_id': str(package.id),
        'start_date': BASE_DATE.isoformat(),
        'duration_months': 1,
    }
    subscription_id = api_client.post('/api/v1/subscriptions/', payload, format='json').data['id']
    slot = Appointment.objects.filter(subscription_id=subscription_id).order_by('date').first()

    response = api_client.patch(
        f'/api/v1/appointments/{slot.id}/', {'service': str(service_a.id)}, format='json'
    )

    assert response.status_code == 400
    assert AppointmentService.objects.filter(appointment=slot).count() == 2
