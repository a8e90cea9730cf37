"""
Notification models.
WhatsApp messages queued for clients, with delivery attempts tracked.
"""
from django.db import models
from apps.core.models import BaseModel


class NotificationType(models.TextChoices):
    """Types of notifications"""
    APPOINTMENT_CREATED = 'appointment_created', 'Appointment Created'
    APPOINTMENT_UPDATED = 'appointment_updated', 'Appointment Updated'
    APPOINTMENT_CANCELLED = 'appointment_cancelled', 'Appointment Cancelled'
    REMINDER_MORNING = 'reminder_morning', 'Morning Reminder'
    REMINDER_1HOUR = 'reminder_1hour', 'Reminder (1 Hour)'
    SUBSCRIPTION_CREATED = 'subscription_created', 'Subscription Created'
    SUBSCRIPTION_CANCELLED = 'subscription_cancelled', 'Subscription Cancelled'
    BARBER_TRANSFERRED = 'barber_transferred', 'Barber Transferred'
    MANUAL_MESSAGE = 'manual_message', 'Manual Message'


class NotificationStatus(models.TextChoices):
    """Delivery status of a notification"""
    PENDING = 'pending', 'Pending'
    SCHEDULED = 'scheduled', 'Scheduled'
    SENT = 'sent', 'Sent'
    FAILED = 'failed', 'Failed'


class Notification(BaseModel):
    """
    Outgoing WhatsApp message for a client.

    Messages without scheduled_for are sent right away by a Celery task;
    scheduled ones are picked up by the periodic processor once due.
    """
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.CASCADE,
        related_name='notifications'
    )

    appointment = models.ForeignKey(
        'appointments.Appointment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications'
    )

    notification_type = models.CharField(
        max_length=50,
        choices=NotificationType.choices,
        default=NotificationType.MANUAL_MESSAGE,
        db_index=True
    )
    message = models.TextField()

    # WhatsApp chat id, e.g. 5511987654321@c.us
    phone_number = models.CharField(max_length=40)

    status = models.CharField(
        max_length=20,
        choices=NotificationStatus.choices,
        default=NotificationStatus.PENDING,
        db_index=True
    )

    scheduled_for = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    # Error handling
    attempts = models.PositiveSmallIntegerField(default=0)
    max_attempts = models.PositiveSmallIntegerField(default=3)
    error_message = models.TextField(blank=True)

    class Meta:
        db_table = 'notifications'
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'scheduled_for'], name='notif_status_scheduled_idx'),
            models.Index(fields=['client', 'notification_type'], name='notif_client_type_idx'),
        ]

    def __str__(self):
        return f"{self.notification_type} to {self.phone_number} - {self.status}"
