"""Shared fixtures for the barbershop backend tests."""
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from apps.appointments.models import Appointment, AppointmentService
from apps.barbers.models import Barber
from apps.clients.models import Client
from apps.core.utils.constants import (
    APPOINTMENT_STATUS_SCHEDULED,
    PLAN_TYPE_WEEKLY,
    SUBSCRIPTION_STATUS_ACTIVE,
)
from apps.packages import package_service
from apps.services.models import Service
from apps.subscriptions.models import Subscription

# Monday, far enough ahead to always be in the future
BASE_DATE = datetime(2030, 1, 7, 10, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def service_a(db):
    return Service.objects.create(name='Corte', price=Decimal('45.00'), duration_minutes=30)


@pytest.fixture
def service_b(db):
    return Service.objects.create(name='Barba', price=Decimal('35.00'), duration_minutes=20)


@pytest.fixture
def inactive_service(db):
    return Service.objects.create(
        name='Pigmentação', price=Decimal('60.00'), duration_minutes=40, is_active=False
    )


@pytest.fixture
def barber(db):
    return Barber.objects.create(name='João', phone='34998765432')


@pytest.fixture
def other_barber(db):
    return Barber.objects.create(name='Pedro', phone='34998760000')


@pytest.fixture
def client_obj(db):
    return Client.objects.create(name='Carlos Silva', phone='34991234567')


@pytest.fixture
def other_client(db):
    return Client.objects.create(name='Marcos Lima', phone='11987654321')


@pytest.fixture
def package(service_a, service_b):
    """Weekly package: base 80.00, discount 10.00, final 70.00"""
    return package_service.create_package(
        name='Corte + Barba',
        plan_type=PLAN_TYPE_WEEKLY,
        service_ids=[service_a.id, service_b.id],
        discount_amount=Decimal('10.00'),
    )


@pytest.fixture
def make_subscription(db):
    """Create a subscription row directly, without generating slots"""
    def _make(client, barber, package=None, service=None, status=SUBSCRIPTION_STATUS_ACTIVE,
              plan_type=PLAN_TYPE_WEEKLY):
        return Subscription.objects.create(
            client=client,
            barber=barber,
            package=package,
            service=service,
            plan_type=plan_type,
            status=status,
            start_date=BASE_DATE,
            end_date=BASE_DATE + timedelta(days=31),
            duration_months=1,
            total_slots=5,
        )
    return _make


@pytest.fixture
def make_appointment(db):
    """Create an appointment, optionally linking its service"""
    def _make(client, barber, date, service=None, status=APPOINTMENT_STATUS_SCHEDULED,
              subscription=None, link_service=True):
        appointment = Appointment.objects.create(
            client=client,
            barber=barber,
            service=service,
            subscription=subscription,
            is_subscription_based=subscription is not None,
            date=date,
            status=status,
        )
        if service is not None and link_service:
            AppointmentService.objects.create(appointment=appointment, service=service)
        return appointment
    return _make


@pytest.fixture
def future():
    """Datetime helper relative to now"""
    def _future(days=1, hours=0):
        return timezone.now() + timedelta(days=days, hours=hours)
    return _future


@pytest.fixture
def api_user(db):
    return get_user_model().objects.create_user(username='admin', password='secret')


@pytest.fixture
def api_client(api_user):
    client = APIClient()
    client.force_authenticate(user=api_user)
    return client
