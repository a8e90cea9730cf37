"""
Appointment models
"""
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import (
    APPOINTMENT_STATUSES,
    APPOINTMENT_STATUS_SCHEDULED,
    DEFAULT_APPOINTMENT_DURATION_MINUTES,
)


class Appointment(BaseModel):
    """
    A single visit of a client to a barber.

    Plain bookings carry a single service; subscription slots leave
    service empty and list the package services through AppointmentService.
    COMPLETED, CANCELLED and NO_SHOW are terminal.
    """
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.CASCADE,
        related_name='appointments'
    )

    barber = models.ForeignKey(
        'barbers.Barber',
        on_delete=models.PROTECT,
        related_name='appointments'
    )

    service = models.ForeignKey(
        'services.Service',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='appointments'
    )

    # Subscription slot
    subscription = models.ForeignKey(
        'subscriptions.Subscription',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='appointments'
    )
    is_subscription_based = models.BooleanField(default=False)
    subscription_slot_index = models.PositiveIntegerField(null=True, blank=True)

    date = models.DateTimeField(db_index=True)
    status = models.CharField(
        max_length=20,
        choices=APPOINTMENT_STATUSES,
        default=APPOINTMENT_STATUS_SCHEDULED,
        db_index=True
    )
    notes = models.TextField(blank=True)

    services = models.ManyToManyField(
        'services.Service',
        through='AppointmentService',
        related_name='rendered_appointments'
    )

    class Meta:
        db_table = 'appointments'
        verbose_name = 'Appointment'
        verbose_name_plural = 'Appointments'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['barber', 'status', 'date'], name='appt_barber_status_date_idx'),
            models.Index(fields=['client', 'status'], name='appt_client_status_idx'),
            models.Index(fields=['subscription', 'subscription_slot_index'], name='appt_subscription_slot_idx'),
        ]

    def __str__(self):
        return f"{self.client.name} - {self.barber.name} - {self.date}"

    @property
    def duration_minutes(self):
        """
        Total duration: sum of linked services, else the legacy service,
        else the default slot length.
        """
        linked = [link.service.duration_minutes for link in self.appointment_services.all()]
        if linked:
            return sum(linked)
        if self.service_id:
            return self.service.duration_minutes
        return DEFAULT_APPOINTMENT_DURATION_MINUTES


class AppointmentService(BaseModel):
    """
    Service actually rendered in an appointment.
    """
    appointment = models.ForeignKey(
        Appointment,
        on_delete=models.CASCADE,
        related_name='appointment_services'
    )

    service = models.ForeignKey(
        'services.Service',
        on_delete=models.PROTECT,
        related_name='service_appointments'
    )

    class Meta:
        db_table = 'appointment_services'
        verbose_name = 'Appointment Service'
        verbose_name_plural = 'Appointment Services'
        unique_together = ['appointment', 'service']

    def __str__(self):
        return f"{self.appointment_id} - {self.service.name}"
