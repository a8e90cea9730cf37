"""
Subscription admin interface.
"""
from django.contrib import admin
from .models import Subscription, SubscriptionChangeLog


class SubscriptionChangeLogInline(admin.TabularInline):
    model = SubscriptionChangeLog
    extra = 0
    readonly_fields = ['change_type', 'description', 'old_value', 'new_value', 'reason', 'created_at']
    can_delete = False


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for subscriptions."""
    list_display = [
        'client', 'barber', 'package', 'plan_type', 'status',
        'start_date', 'end_date', 'total_slots'
    ]
    list_filter = ['status', 'plan_type', 'created_at']
    search_fields = ['client__name', 'barber__name', 'package__name']
    readonly_fields = ['paused_at', 'cancelled_at', 'created_at', 'updated_at']
    inlines = [SubscriptionChangeLogInline]

    fieldsets = (
        ('Enrolment', {
            'fields': ('client', 'barber', 'package', 'service', 'plan_type', 'status')
        }),
        ('Period', {
            'fields': ('start_date', 'end_date', 'duration_months', 'total_slots')
        }),
        ('Lifecycle', {
            'fields': ('paused_at', 'cancelled_at', 'cancellation_reason', 'notes')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(SubscriptionChangeLog)
class SubscriptionChangeLogAdmin(admin.ModelAdmin):
    list_display = ['subscription', 'change_type', 'created_at']
    list_filter = ['change_type', 'created_at']
    readonly_fields = ['subscription', 'change_type', 'description', 'old_value', 'new_value', 'reason']
