"""
Core abstract models for inheritance
"""
import uuid
from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model with created_at and updated_at timestamps
    """
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UUIDModel(models.Model):
    """
    Abstract base model with UUID primary key
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class BaseModel(UUIDModel, TimeStampedModel):
    """
    Abstract base model combining UUID and timestamps
    """
    class Meta:
        abstract = True


class ActiveQuerySet(models.QuerySet):
    """QuerySet helpers for models soft-deleted through an is_active flag"""

    def active(self):
        return self.filter(is_active=True)

    def inactive(self):
        return self.filter(is_active=False)


class ActivatableModel(BaseModel):
    """
    Abstract model for catalog entities that are never hard-deleted.

    The single is_active flag is the whole lifecycle of these records;
    deactivated rows stay in place so historical appointments keep
    pointing at them.
    """
    is_active = models.BooleanField(default=True, db_index=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        abstract = True
