"""
Package service layer.

This module provides high-level functions for:
- Creating packages from a set of active services
- Enforcing the pricing rule final_price = base_price - discount_amount
- Replacing a package's service set atomically
- Guarding deactivation while subscriptions still depend on a package
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction

from apps.core.exceptions import InvalidOperation, ResourceConflict, ResourceNotFound
from apps.core.utils.constants import LIVE_SUBSCRIPTION_STATUSES, PLAN_TYPE_INTERVAL_DAYS
from apps.packages.models import Package, PackageService
from apps.services.models import Service
from apps.subscriptions.models import Subscription

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')

UPDATABLE_FIELDS = ('name', 'description', 'plan_type')


def _to_money(value):
    if value is None:
        return Decimal('0.00')
    try:
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except ArithmeticError:
        raise InvalidOperation(f"Invalid amount: {value}")


def _validate_plan_type(plan_type):
    if plan_type not in PLAN_TYPE_INTERVAL_DAYS:
        raise InvalidOperation(f"Invalid plan type: {plan_type}")


def _validate_discount(discount_amount):
    discount = _to_money(discount_amount)
    if discount < 0:
        raise InvalidOperation("Discount cannot be negative")
    return discount


def _resolve_services(service_ids):
    """
    Resolve service ids to active services, preserving the given order.

    Args:
        service_ids: list of Service ids

    Returns:
        list of Service instances in the order of service_ids

    Raises:
        InvalidOperation: empty list, duplicates, or missing/inactive ids
    """
    if not service_ids:
        raise InvalidOperation("A package needs at least one service")

    normalized = [str(service_id) for service_id in service_ids]
    if len(set(normalized)) != len(normalized):
        raise InvalidOperation("Duplicate services are not allowed in a package")

    services = {
        str(service.id): service
        for service in Service.objects.active().filter(id__in=normalized)
    }

    missing = [service_id for service_id in normalized if service_id not in services]
    if missing:
        raise InvalidOperation(
            f"Services not found or inactive: {', '.join(missing)}"
        )

    return [services[service_id] for service_id in normalized]


def calculate_final_price(base_price, discount_amount):
    """
    Apply the package pricing rule.

    Raises:
        InvalidOperation: when the discount exceeds the base price
    """
    final_price = _to_money(base_price) - _to_money(discount_amount)
    if final_price < 0:
        raise InvalidOperation("Discount cannot exceed the base price")
    return final_price


def _replace_links(package, services):
    package.package_services.all().delete()
    PackageService.objects.bulk_create([
        PackageService(package=package, service=service, position=position)
        for position, service in enumerate(services)
    ])


def get_package(package_id):
    """
    Get a package hydrated with its services.

    Raises:
        ResourceNotFound: package does not exist
    """
    package = Package.objects.with_services().filter(id=package_id).first()
    if package is None:
        raise ResourceNotFound(f"Package {package_id} not found")
    return package


def list_packages(is_active=None):
    """
    List packages, newest first.

    Args:
        is_active: True/False to filter, None for all packages
    """
    queryset = Package.objects.with_services()
    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    return queryset.order_by('-created_at')


def create_package(name, plan_type, service_ids, description='', discount_amount=0):
    """
    Create a package from a set of active services.

    base_price is the sum of the service prices at creation time.

    Args:
        name: package name
        plan_type: 'weekly' or 'biweekly'
        service_ids: non-empty list of distinct Service ids
        description: optional description
        discount_amount: non-negative discount applied to base_price

    Returns:
        Package instance with services prefetched
    """
    if not name:
        raise InvalidOperation("Package name is required")
    _validate_plan_type(plan_type)
    discount = _validate_discount(discount_amount)
    services = _resolve_services(service_ids)

    base_price = sum((_to_money(service.price) for service in services), Decimal('0.00'))
    final_price = calculate_final_price(base_price, discount)

    with transaction.atomic():
        package = Package.objects.create(
            name=name,
            description=description or '',
            plan_type=plan_type,
            base_price=base_price,
            discount_amount=discount,
            final_price=final_price,
        )
        _replace_links(package, services)

    logger.info(
        f"Created package {package.id} '{name}' with {len(services)} services "
        f"(base={base_price}, final={final_price})"
    )
    return get_package(package.id)


def count_active_subscriptions(package_id):
    """Count subscriptions on this package that are active or paused"""
    return Subscription.objects.filter(
        package_id=package_id,
        status__in=LIVE_SUBSCRIPTION_STATUSES
    ).count()


def _ensure_can_deactivate(package_id):
    active_count = count_active_subscriptions(package_id)
    if active_count > 0:
        raise ResourceConflict(
            f"Cannot deactivate package: {active_count} active subscription(s) still use it"
        )


def update_package(package_id, data):
    """
    Partially update a package.

    Recognised keys: name, description, plan_type, service_ids,
    discount_amount, is_active. A new service_ids list fully replaces
    the service set and recomputes base_price. final_price is always
    recomputed.

    Existing subscriptions keep their enrolment as-is; the change only
    affects future enrolments.

    Returns:
        Package instance with services prefetched
    """
    with transaction.atomic():
        package = Package.objects.select_for_update().filter(id=package_id).first()
        if package is None:
            raise ResourceNotFound(f"Package {package_id} not found")

        if 'plan_type' in data:
            _validate_plan_type(data['plan_type'])
        if 'name' in data and not data['name']:
            raise InvalidOperation("Package name is required")

        services = None
        if 'service_ids' in data:
            services = _resolve_services(data['service_ids'])

        discount = None
        if 'discount_amount' in data:
            discount = _validate_discount(data['discount_amount'])

        if data.get('is_active') is False and package.is_active:
            _ensure_can_deactivate(package.id)

        for field in UPDATABLE_FIELDS:
            if field in data:
                setattr(package, field, data[field] if data[field] is not None else '')

        if services is not None:
            package.base_price = sum(
                (_to_money(service.price) for service in services), Decimal('0.00')
            )
            _replace_links(package, services)

        if discount is not None:
            package.discount_amount = discount

        package.final_price = calculate_final_price(package.base_price, package.discount_amount)

        if 'is_active' in data and data['is_active'] is not None:
            package.is_active = bool(data['is_active'])

        package.save()

    logger.info(f"Updated package {package_id}: {sorted(data.keys())}")
    return get_package(package_id)


def deactivate_package(package_id):
    """
    Soft-deactivate a package.

    Raises:
        ResourceNotFound: package does not exist
        ResourceConflict: active or paused subscriptions still use the package
    """
    package = Package.objects.filter(id=package_id).first()
    if package is None:
        raise ResourceNotFound(f"Package {package_id} not found")

    _ensure_can_deactivate(package.id)

    package.is_active = False
    package.save(update_fields=['is_active', 'updated_at'])

    logger.info(f"Deactivated package {package_id}")
    return package
