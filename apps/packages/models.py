"""
Package models

A package bundles an ordered set of services under one recurring price.
Prices are snapshotted: base_price is the sum of the service prices at the
moment the package was created or last had its service set replaced.
"""
from django.db import models
from django.db.models import Prefetch, Q

from apps.core.models import ActiveQuerySet, ActivatableModel, BaseModel
from apps.core.utils.constants import PLAN_TYPES


class PackageQuerySet(ActiveQuerySet):

    def with_services(self):
        """Hydrate each package with its ordered service links"""
        return self.prefetch_related(
            Prefetch(
                'package_services',
                queryset=PackageService.objects.select_related('service').order_by('position'),
            )
        )


class Package(ActivatableModel):
    """
    Bundle of services sold under a single price with a weekly or
    biweekly cadence.

    Invariant: final_price == base_price - discount_amount, and
    final_price is never negative. Packages are only soft-deactivated.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    plan_type = models.CharField(max_length=20, choices=PLAN_TYPES)

    # Pricing
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    final_price = models.DecimalField(max_digits=10, decimal_places=2)

    services = models.ManyToManyField(
        'services.Service',
        through='PackageService',
        related_name='packages'
    )

    objects = PackageQuerySet.as_manager()

    class Meta:
        db_table = 'packages'
        verbose_name = 'Package'
        verbose_name_plural = 'Packages'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'plan_type'], name='packages_active_plan_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(discount_amount__gte=0),
                name='package_discount_non_negative',
            ),
            models.CheckConstraint(
                condition=Q(final_price__gte=0),
                name='package_final_price_non_negative',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_plan_type_display()})"

    @property
    def ordered_services(self):
        """Services in package order; uses the prefetch from with_services()"""
        return [link.service for link in self.package_services.all()]

    @property
    def total_duration_minutes(self):
        return sum(service.duration_minutes for service in self.ordered_services)


class PackageService(BaseModel):
    """
    Through model for Package-Service relationship
    """
    package = models.ForeignKey(
        Package,
        on_delete=models.CASCADE,
        related_name='package_services'
    )

    service = models.ForeignKey(
        'services.Service',
        on_delete=models.PROTECT,
        related_name='service_packages'
    )

    # Order of the service inside the package
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'package_services'
        verbose_name = 'Package Service'
        verbose_name_plural = 'Package Services'
        ordering = ['position']
        unique_together = ['package', 'service']

    def __str__(self):
        return f"{self.package.name} - {self.service.name}"
