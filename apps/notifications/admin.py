"""
Admin configuration for notifications app.
"""
from django.contrib import admin

from apps.notifications.models import Notification, NotificationStatus
from apps.notifications.services.notification_service import process_notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin for queued WhatsApp notifications."""
    list_display = [
        'client', 'notification_type', 'status',
        'attempts', 'scheduled_for', 'sent_at', 'created_at'
    ]
    list_filter = ['notification_type', 'status', 'created_at']
    search_fields = ['client__name', 'phone_number', 'message']
    readonly_fields = ['sent_at', 'attempts', 'error_message', 'created_at', 'updated_at']
    ordering = ['-created_at']
    actions = ['resend']

    @admin.action(description='Resend selected notifications')
    def resend(self, request, queryset):
        notification_ids = list(
            queryset.exclude(status=NotificationStatus.SENT).values_list('id', flat=True)
        )
        Notification.objects.filter(id__in=notification_ids).update(
            status=NotificationStatus.PENDING, attempts=0
        )
        sent = 0
        for notification_id in notification_ids:
            if process_notification(notification_id).status == NotificationStatus.SENT:
                sent += 1
        self.message_user(request, f"{sent} notification(s) sent")
