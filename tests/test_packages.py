from decimal import Decimal
import uuid

import pytest

from apps.core.exceptions import InvalidOperation, ResourceConflict, ResourceNotFound
from apps.core.utils.constants import (
    PLAN_TYPE_BIWEEKLY,
    PLAN_TYPE_WEEKLY,
    SUBSCRIPTION_STATUS_CANCELLED,
    SUBSCRIPTION_STATUS_COMPLETED,
    SUBSCRIPTION_STATUS_PAUSED,
)
from apps.packages import package_service
from apps.packages.models import Package, PackageService

pytestmark = pytest.mark.django_db


def test_create_package_computes_prices(package, service_a, service_b):
    assert package.base_price == Decimal('80.00')
    assert package.discount_amount == Decimal('10.00')
    assert package.final_price == Decimal('70.00')
    assert package.final_price == package.base_price - package.discount_amount
    assert [service.id for service in package.ordered_services] == [service_a.id, service_b.id]
    assert package.total_duration_minutes == 50
    assert package.is_active is True


def test_create_package_without_discount(service_a):
    package = package_service.create_package(
        name='Só Corte', plan_type=PLAN_TYPE_BIWEEKLY, service_ids=[service_a.id]
    )

    assert package.base_price == Decimal('45.00')
    assert package.final_price == Decimal('45.00')


def test_create_package_discount_exceeds_base_400(service_a, service_b):
    with pytest.raises(InvalidOperation) as exc:
        package_service.create_package(
            name='Caro demais',
            plan_type=PLAN_TYPE_WEEKLY,
            service_ids=[service_a.id, service_b.id],
            discount_amount=Decimal('90.00'),
        )

    assert 'Discount cannot exceed the base price' in str(exc.value)
    assert Package.objects.count() == 0


def test_create_package_inactive_service_rejected(service_a, inactive_service):
    with pytest.raises(InvalidOperation) as exc:
        package_service.create_package(
            name='Com inativo',
            plan_type=PLAN_TYPE_WEEKLY,
            service_ids=[service_a.id, inactive_service.id],
        )

    assert str(inactive_service.id) in str(exc.value)
    assert Package.objects.count() == 0
    assert PackageService.objects.count() == 0


def test_create_package_unknown_service_rejected(service_a):
    missing_id = uuid.uuid4()

    with pytest.raises(InvalidOperation) as exc:
        package_service.create_package(
            name='Fantasma', plan_type=PLAN_TYPE_WEEKLY, service_ids=[service_a.id, missing_id]
        )

    assert str(missing_id) in str(exc.value)


def test_create_package_duplicate_services_rejected(service_a):
    with pytest.raises(InvalidOperation):
        package_service.create_package(
            name='Duplicado', plan_type=PLAN_TYPE_WEEKLY, service_ids=[service_a.id, service_a.id]
        )


def test_create_package_empty_services_rejected(db):
    with pytest.raises(InvalidOperation):
        package_service.create_package(name='Vazio', plan_type=PLAN_TYPE_WEEKLY, service_ids=[])


def test_create_package_invalid_plan_type_rejected(service_a):
    with pytest.raises(InvalidOperation):
        package_service.create_package(name='Mensal', plan_type='monthly', service_ids=[service_a.id])


def test_update_package_discount_exceeding_base_keeps_package(package):
    with pytest.raises(InvalidOperation):
        package_service.update_package(package.id, {'discount_amount': Decimal('90.00')})

    package.refresh_from_db()
    assert package.discount_amount == Decimal('10.00')
    assert package.final_price == Decimal('70.00')


def test_update_package_replaces_services_and_recomputes(package, service_a, service_b):
    updated = package_service.update_package(package.id, {'service_ids': [service_b.id]})

    assert [service.id for service in updated.ordered_services] == [service_b.id]
    assert updated.base_price == Decimal('35.00')
    # The previous discount still applies
    assert updated.final_price == Decimal('25.00')
    assert PackageService.objects.filter(package=package).count() == 1


def test_update_package_service_set_too_cheap_for_discount(package, service_b):
    # base would become 35.00 with a 40.00 discount
    with pytest.raises(InvalidOperation):
        package_service.update_package(
            package.id, {'service_ids': [service_b.id], 'discount_amount': Decimal('40.00')}
        )

    package.refresh_from_db()
    assert package.base_price == Decimal('80.00')
    assert PackageService.objects.filter(package=package).count() == 2


def test_update_package_fields(package):
    updated = package_service.update_package(
        package.id,
        {'name': 'Combo', 'plan_type': PLAN_TYPE_BIWEEKLY, 'discount_amount': Decimal('0')},
    )

    assert updated.name == 'Combo'
    assert updated.plan_type == PLAN_TYPE_BIWEEKLY
    assert updated.final_price == Decimal('80.00')


def test_update_package_not_found():
    with pytest.raises(ResourceNotFound):
        package_service.update_package(uuid.uuid4(), {'name': 'X'})


def test_update_missing_package_with_bad_services_not_found(db):
    with pytest.raises(ResourceNotFound):
        package_service.update_package(
            uuid.uuid4(), {'service_ids': [uuid.uuid4()], 'discount_amount': Decimal('-1')}
        )


def test_deactivate_package_with_paused_subscriptions_409(
    package, barber, client_obj, other_client, make_subscription
):
    for _ in range(3):
        make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_PAUSED)

    with pytest.raises(ResourceConflict) as exc:
        package_service.deactivate_package(package.id)

    assert '3' in str(exc.value)
    package.refresh_from_db()
    assert package.is_active is True


def test_deactivate_package_ignores_finished_subscriptions(
    package, barber, client_obj, make_subscription
):
    make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_CANCELLED)
    make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_COMPLETED)

    package_service.deactivate_package(package.id)

    package.refresh_from_db()
    assert package.is_active is False


def test_update_package_deactivation_is_guarded(package, barber, client_obj, make_subscription):
    make_subscription(client_obj, barber, package=package)

    with pytest.raises(ResourceConflict):
        package_service.update_package(package.id, {'is_active': False})

    package.refresh_from_db()
    assert package.is_active is True


def test_deactivate_package_not_found(db):
    with pytest.raises(ResourceNotFound):
        package_service.deactivate_package(uuid.uuid4())


def test_count_active_subscriptions(package, barber, client_obj, make_subscription):
    make_subscription(client_obj, barber, package=package)
    make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_PAUSED)
    make_subscription(client_obj, barber, package=package, status=SUBSCRIPTION_STATUS_CANCELLED)

    assert package_service.count_active_subscriptions(package.id) == 2


def test_list_packages_filters_by_active(package, service_a):
    other = package_service.create_package(
        name='Só Corte', plan_type=PLAN_TYPE_WEEKLY, service_ids=[service_a.id]
    )
    package_service.deactivate_package(other.id)

    assert [p.id for p in package_service.list_packages(is_active=True)] == [package.id]
    assert [p.id for p in package_service.list_packages(is_active=False)] == [other.id]
    assert len(package_service.list_packages()) == 2


def test_get_package_not_found(db):
    with pytest.raises(ResourceNotFound):
        package_service.get_package(uuid.uuid4())
