from django.contrib import admin
from .models import Barber, BarberService


class BarberServiceInline(admin.TabularInline):
    model = BarberService
    extra = 0


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'email', 'is_active', 'created_at']
    search_fields = ['name', 'email', 'phone']
    list_filter = ['is_active', 'created_at']
    readonly_fields = ['is_active']
    inlines = [BarberServiceInline]
