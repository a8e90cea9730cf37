from django.contrib import admin
from .models import Appointment, AppointmentService


class AppointmentServiceInline(admin.TabularInline):
    model = AppointmentService
    extra = 0


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ['client', 'barber', 'date', 'status', 'is_subscription_based']
    list_filter = ['status', 'is_subscription_based', 'date']
    search_fields = ['client__name', 'barber__name']
    inlines = [AppointmentServiceInline]
