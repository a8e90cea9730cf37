"""
Client serializers
"""
from rest_framework import serializers

from apps.core.utils.phone import clean_phone, format_display, is_brazilian_mobile
from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Serializer for Client model"""
    phone_display = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = [
            'id', 'name', 'phone', 'phone_display', 'email', 'notes',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_phone_display(self, obj):
        return format_display(obj.phone)

    def validate_phone(self, value):
        if not is_brazilian_mobile(value):
            raise serializers.ValidationError(
                "Phone must be a Brazilian mobile number: DDD + 9 + 8 digits"
            )
        return clean_phone(value)
