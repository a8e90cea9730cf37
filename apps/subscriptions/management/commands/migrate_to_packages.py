"""
Management command to convert legacy single-service subscriptions into
package subscriptions. Safe to run more than once.
"""
from django.core.management.base import BaseCommand, CommandError

from apps.services.models import Service
from apps.subscriptions.package_migration import (
    find_legacy_combinations,
    legacy_package_name,
    migrate_to_packages,
)


class Command(BaseCommand):
    help = 'Create packages for legacy service+plan_type subscriptions and backfill appointment services'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List the packages that would be created without writing anything',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            self._dry_run()
            return

        self.stdout.write("Starting migration to package-based subscriptions...")

        try:
            summary = migrate_to_packages()
        except Exception as e:
            raise CommandError(f"Migration failed: {e}")

        self.stdout.write("=" * 50)
        self.stdout.write("MIGRATION SUMMARY")
        self.stdout.write("=" * 50)
        self.stdout.write(f"Packages created this run: {summary['packages_created']}")
        self.stdout.write(f"Subscriptions migrated this run: {summary['subscriptions_migrated']}")
        self.stdout.write(
            f"Appointment services created this run: {summary['appointment_services_created']}"
        )
        self.stdout.write(f"Legacy packages total: {summary['legacy_packages_total']}")
        self.stdout.write(f"Subscriptions with package: {summary['migrated_subscriptions_total']}")
        self.stdout.write(f"Appointment services total: {summary['appointment_services_total']}")

        if summary['subscriptions_pending']:
            self.stdout.write(self.style.WARNING(
                f"Subscriptions pending: {summary['subscriptions_pending']}"
            ))
        else:
            self.stdout.write(self.style.SUCCESS("Subscriptions pending: 0"))

        self.stdout.write(self.style.SUCCESS("\nMigration completed successfully!"))

    def _dry_run(self):
        combinations = find_legacy_combinations()
        services = Service.objects.in_bulk({service_id for service_id, _ in combinations})

        self.stdout.write(f"Found {len(combinations)} unique service+plan_type combinations")
        for service_id, plan_type in combinations:
            service = services.get(service_id)
            if service is None:
                continue
            self.stdout.write(f"  Would use package: {legacy_package_name(service, plan_type)}")

        self.stdout.write(self.style.WARNING("\nDry run complete. Nothing was written."))
