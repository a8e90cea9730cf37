"""
Subscription models for client enrolment in packages.

This module contains:
- Subscription: A client's enrolment in a package with one barber
- SubscriptionChangeLog: Audit trail of lifecycle changes
"""
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import (
    PLAN_TYPES,
    SUBSCRIPTION_STATUSES,
    SUBSCRIPTION_STATUS_ACTIVE,
    SUBSCRIPTION_CHANGE_TYPES,
    APPOINTMENT_STATUS_COMPLETED,
)


class Subscription(BaseModel):
    """
    Client enrolment in a package with a given barber.

    Business Rules:
    - A client holds at most ONE active subscription
    - Every slot is an Appointment tagged is_subscription_based
    - CANCELLED is terminal; nothing revives a cancelled subscription
    - Legacy rows reference a bare service instead of a package until
      the migrate_to_packages command has run
    """
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.CASCADE,
        related_name='subscriptions'
    )

    barber = models.ForeignKey(
        'barbers.Barber',
        on_delete=models.PROTECT,
        related_name='subscriptions'
    )

    # Lookup only; the subscription does not own the package lifecycle
    package = models.ForeignKey(
        'packages.Package',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='subscriptions'
    )

    # Legacy single-service subscriptions (pre-package data)
    service = models.ForeignKey(
        'services.Service',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='legacy_subscriptions'
    )

    plan_type = models.CharField(max_length=20, choices=PLAN_TYPES)
    status = models.CharField(
        max_length=20,
        choices=SUBSCRIPTION_STATUSES,
        default=SUBSCRIPTION_STATUS_ACTIVE,
        db_index=True
    )

    # Period
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    duration_months = models.PositiveSmallIntegerField()
    total_slots = models.PositiveIntegerField()

    notes = models.TextField(blank=True)

    # Lifecycle timestamps
    paused_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.TextField(blank=True)

    class Meta:
        db_table = 'subscriptions'
        verbose_name = 'Subscription'
        verbose_name_plural = 'Subscriptions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['client', 'status'], name='subs_client_status_idx'),
            models.Index(fields=['barber', 'status'], name='subs_barber_status_idx'),
            models.Index(fields=['package', 'status'], name='subs_package_status_idx'),
            models.Index(fields=['service', 'plan_type'], name='subs_service_plan_idx'),
        ]

    def __str__(self):
        return f"{self.client.name} - {self.get_plan_type_display()} ({self.status})"

    @property
    def completed_slots(self):
        """Number of slots already attended"""
        return self.appointments.filter(status=APPOINTMENT_STATUS_COMPLETED).count()


class SubscriptionChangeLog(BaseModel):
    """
    Tracks subscription changes for audit trail.
    """
    subscription = models.ForeignKey(
        Subscription,
        on_delete=models.CASCADE,
        related_name='change_logs'
    )

    change_type = models.CharField(
        max_length=30,
        choices=SUBSCRIPTION_CHANGE_TYPES,
        db_index=True
    )
    description = models.TextField()

    old_value = models.JSONField(null=True, blank=True)
    new_value = models.JSONField(null=True, blank=True)
    reason = models.TextField(blank=True)

    class Meta:
        db_table = 'subscription_change_logs'
        verbose_name = 'Subscription Change Log'
        verbose_name_plural = 'Subscription Change Logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['subscription', 'change_type'], name='sublog_sub_change_type_idx'),
        ]

    def __str__(self):
        return f"{self.subscription_id} - {self.change_type}"
