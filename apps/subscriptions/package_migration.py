"""
Conversion of legacy single-service subscriptions into package subscriptions.

Before packages existed a subscription pointed at one service and a plan
type. This module creates one package per distinct (service, plan_type)
pair, points the legacy subscriptions at it and backfills the
appointment-service links of appointments that only carry a service.

Every step commits on its own and is safe to run again.
"""
import logging

from django.db import transaction
from django.db.models import Exists, OuterRef

from apps.appointments.models import Appointment, AppointmentService
from apps.core.utils.constants import PLAN_TYPE_LABELS_PT
from apps.packages.models import Package, PackageService
from apps.subscriptions.models import Subscription

logger = logging.getLogger(__name__)

LEGACY_PACKAGE_DESCRIPTION = 'Pacote criado automaticamente na migração de dados'

BATCH_SIZE = 500


def legacy_package_name(service, plan_type):
    return f"Pacote {service.name} - {PLAN_TYPE_LABELS_PT.get(plan_type, plan_type)}"


def find_legacy_combinations():
    """
    Step 1: distinct (service_id, plan_type) pairs of unmigrated subscriptions.
    """
    return list(
        Subscription.objects.filter(
            service__isnull=False,
            package__isnull=True,
        ).values_list('service_id', 'plan_type').distinct().order_by('service_id', 'plan_type')
    )


def get_or_create_legacy_package(service, plan_type):
    """
    Step 2: the package standing in for a (service, plan_type) pair.

    Returns:
        tuple: (package, created)
    """
    name = legacy_package_name(service, plan_type)

    with transaction.atomic():
        package = Package.objects.filter(
            name=name,
            plan_type=plan_type,
            description=LEGACY_PACKAGE_DESCRIPTION,
            package_services__service=service,
        ).first()
        if package is not None:
            return package, False

        package = Package.objects.create(
            name=name,
            description=LEGACY_PACKAGE_DESCRIPTION,
            plan_type=plan_type,
            base_price=service.price,
            discount_amount=0,
            final_price=service.price,
            is_active=True,
        )
        PackageService.objects.create(package=package, service=service, position=0)

    return package, True


def attach_subscriptions(package, service_id, plan_type):
    """
    Step 3: point the remaining legacy subscriptions of the pair at the package.
    """
    return Subscription.objects.filter(
        service_id=service_id,
        plan_type=plan_type,
        package__isnull=True,
    ).update(package=package)


def insert_appointment_links(links):
    """
    Bulk insert AppointmentService rows, skipping pairs that already exist.

    bulk_create with ignore_conflicts returns every object it was given, so
    the rows actually written are counted from the table.
    """
    before = AppointmentService.objects.count()
    AppointmentService.objects.bulk_create(links, ignore_conflicts=True)
    return AppointmentService.objects.count() - before


def backfill_appointment_services():
    """
    Step 4: create the missing AppointmentService row of every appointment
    that carries a single service.
    """
    link_exists = AppointmentService.objects.filter(
        appointment_id=OuterRef('pk'),
        service_id=OuterRef('service_id'),
    )
    missing = Appointment.objects.filter(
        service__isnull=False
    ).annotate(
        has_link=Exists(link_exists)
    ).filter(
        has_link=False
    ).values_list('id', 'service_id')

    created = 0
    batch = []
    for appointment_id, service_id in missing.iterator(chunk_size=BATCH_SIZE):
        batch.append(AppointmentService(appointment_id=appointment_id, service_id=service_id))
        if len(batch) >= BATCH_SIZE:
            created += insert_appointment_links(batch)
            batch = []
    if batch:
        created += insert_appointment_links(batch)

    return created


def build_summary(packages_created, subscriptions_migrated, appointment_services_created):
    """Step 5: counts for this run plus the overall state after it"""
    return {
        'packages_created': packages_created,
        'subscriptions_migrated': subscriptions_migrated,
        'appointment_services_created': appointment_services_created,
        'legacy_packages_total': Package.objects.filter(
            description=LEGACY_PACKAGE_DESCRIPTION
        ).count(),
        'migrated_subscriptions_total': Subscription.objects.filter(package__isnull=False).count(),
        'subscriptions_pending': Subscription.objects.filter(
            service__isnull=False,
            package__isnull=True,
        ).count(),
        'appointment_services_total': AppointmentService.objects.count(),
    }


def migrate_to_packages():
    """
    Run the whole conversion.

    Returns:
        dict summary (see build_summary)

    Raises:
        Any error from a step; steps already finished stay committed
    """
    from apps.services.models import Service

    logger.info("Starting migration to package-based subscriptions")

    try:
        combinations = find_legacy_combinations()
        logger.info(f"Found {len(combinations)} unique service+plan_type combinations")

        services = Service.objects.in_bulk({service_id for service_id, _ in combinations})

        packages_created = 0
        subscriptions_migrated = 0
        for service_id, plan_type in combinations:
            service = services.get(service_id)
            if service is None:
                continue

            package, created = get_or_create_legacy_package(service, plan_type)
            if created:
                packages_created += 1
                logger.info(f"Created legacy package {package.id}: {package.name}")

            updated = attach_subscriptions(package, service_id, plan_type)
            subscriptions_migrated += updated
            logger.info(f"Updated {updated} subscriptions for service {service_id} ({plan_type})")

        appointment_services_created = backfill_appointment_services()
        logger.info(f"Created {appointment_services_created} appointment service relations")

    except Exception as e:
        logger.error(f"Migration to packages failed: {e}")
        raise

    summary = build_summary(packages_created, subscriptions_migrated, appointment_services_created)
    logger.info(f"Migration to packages completed: {summary}")
    return summary
