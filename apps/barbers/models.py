"""
Barber models
"""
from django.db import models
from apps.core.models import ActivatableModel, BaseModel


class Barber(ActivatableModel):
    """
    Barber working at the shop.

    Deactivation is a one-way lifecycle step for future work: pending
    appointments and subscriptions are transferred or cancelled, past
    records keep pointing at the barber.
    """
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)

    # e.g. ["Corte", "Barba", "Pigmentação"]
    specialties = models.JSONField(default=list, blank=True)

    # Services this barber can provide (many-to-many through BarberService)
    services = models.ManyToManyField(
        'services.Service',
        through='BarberService',
        related_name='barbers'
    )

    class Meta:
        db_table = 'barbers'
        verbose_name = 'Barber'
        verbose_name_plural = 'Barbers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'name'], name='barbers_active_name_idx'),
        ]

    def __str__(self):
        return self.name


class BarberService(BaseModel):
    """
    Through model for Barber-Service relationship
    """
    barber = models.ForeignKey(
        Barber,
        on_delete=models.CASCADE,
        related_name='barber_services'
    )

    service = models.ForeignKey(
        'services.Service',
        on_delete=models.CASCADE,
        related_name='service_barbers'
    )

    class Meta:
        db_table = 'barber_services'
        verbose_name = 'Barber Service'
        verbose_name_plural = 'Barber Services'
        unique_together = ['barber', 'service']

    def __str__(self):
        return f"{self.barber.name} - {self.service.name}"
