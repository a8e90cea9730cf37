"""
Client models
"""
from django.db import models
from apps.core.models import ActivatableModel
from apps.core.validators import validate_phone_number


class Client(ActivatableModel):
    """
    Barbershop client. WhatsApp notifications are sent to the phone.
    """
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, validators=[validate_phone_number])
    email = models.EmailField(blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'clients'
        verbose_name = 'Client'
        verbose_name_plural = 'Clients'
        ordering = ['name']
        indexes = [
            models.Index(fields=['phone'], name='clients_phone_idx'),
        ]

    def __str__(self):
        return self.name
