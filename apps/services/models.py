"""
Service model
"""
from django.db import models
from apps.core.models import ActivatableModel
from apps.core.validators import validate_non_negative_decimal, validate_duration


class Service(ActivatableModel):
    """
    Service offered by the barbershop (haircut, beard trim, ...)

    Packages snapshot the price when they are created or updated, so
    editing price or duration here never rewrites existing packages.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    # Pricing
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[validate_non_negative_decimal]
    )

    # Duration
    duration_minutes = models.IntegerField(validators=[validate_duration])

    class Meta:
        db_table = 'services'
        verbose_name = 'Service'
        verbose_name_plural = 'Services'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'name'], name='services_active_name_idx'),
        ]

    def __str__(self):
        return f"{self.name} (R$ {self.price})"
