from django.contrib import admin
from .models import Package, PackageService


class PackageServiceInline(admin.TabularInline):
    model = PackageService
    extra = 0
    ordering = ['position']


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    list_display = ['name', 'plan_type', 'base_price', 'discount_amount', 'final_price', 'is_active']
    list_filter = ['plan_type', 'is_active', 'created_at']
    search_fields = ['name']
    readonly_fields = ['base_price', 'final_price']
    inlines = [PackageServiceInline]
