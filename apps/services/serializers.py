"""
Service serializers
"""
from rest_framework import serializers
from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    """Serializer for Service model"""

    class Meta:
        model = Service
        fields = [
            'id', 'name', 'description', 'price', 'duration_minutes',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value

    def validate_duration_minutes(self, value):
        if value <= 0:
            raise serializers.ValidationError("Duration must be greater than zero")
        if value > 480:  # 8 hours
            raise serializers.ValidationError("Duration cannot exceed 8 hours")
        return value


class ServiceSummarySerializer(serializers.ModelSerializer):
    """Compact service shape embedded in packages and appointments"""
    duration = serializers.IntegerField(source='duration_minutes', read_only=True)

    class Meta:
        model = Service
        fields = ['id', 'name', 'price', 'duration']
        read_only_fields = fields
