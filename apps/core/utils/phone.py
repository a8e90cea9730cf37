"""
Phone number helpers for Brazilian mobile numbers and WhatsApp ids
"""
import re

from django.conf import settings

BRAZILIAN_MOBILE_REGEX = re.compile(r'^[1-9]{2}9[0-9]{8}$')
WHATSAPP_SUFFIX = '@c.us'


def clean_phone(phone: str) -> str:
    """Strip everything but digits"""
    return re.sub(r'\D', '', phone or '')


def is_brazilian_mobile(phone: str) -> bool:
    return bool(BRAZILIAN_MOBILE_REGEX.match(clean_phone(phone)))


def to_whatsapp_id(phone: str) -> str:
    """
    Convert a phone number to the WhatsApp id format.

    '(34) 99876-5432' -> '5534998765432@c.us'. Ids already in that
    format are returned unchanged.
    """
    if phone.endswith(WHATSAPP_SUFFIX):
        return phone
    country_code = getattr(settings, 'WHATSAPP_COUNTRY_CODE', '55')
    return f"{country_code}{clean_phone(phone)}{WHATSAPP_SUFFIX}"


def format_display(phone: str) -> str:
    """Format an 11-digit number as (XX) 9XXXX-XXXX"""
    digits = clean_phone(phone)
    if len(digits) != 11:
        return phone
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
