"""
Custom validators
"""
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from apps.core.utils.phone import is_brazilian_mobile


def validate_phone_number(value):
    """
    Validate Brazilian mobile number: DDD + 9 + 8 digits, e.g. (34) 99876-5432
    """
    if not is_brazilian_mobile(value):
        raise ValidationError(
            _('Phone number must be a Brazilian mobile number, e.g. (34) 99876-5432.')
        )


def validate_non_negative_decimal(value):
    """
    Validate that decimal is zero or positive
    """
    if value < 0:
        raise ValidationError(
            _('Value cannot be negative.')
        )


def validate_duration(value):
    """
    Validate duration in minutes (must be positive and reasonable)
    """
    if value <= 0 or value > 480:  # Max 8 hours
        raise ValidationError(
            _('Duration must be between 1 and 480 minutes.')
        )
