"""
Package serializers
"""
from decimal import Decimal

from rest_framework import serializers
from drf_spectacular.utils import extend_schema_serializer, OpenApiExample

from apps.core.utils.constants import PLAN_TYPES
from apps.services.serializers import ServiceSummarySerializer
from .models import Package


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            'Package Response',
            value={
                'id': '550e8400-e29b-41d4-a716-446655440000',
                'name': 'Corte + Barba',
                'description': '',
                'plan_type': 'weekly',
                'base_price': '80.00',
                'discount_amount': '10.00',
                'final_price': '70.00',
                'is_active': True,
                'services': [
                    {'id': '660e8400-e29b-41d4-a716-446655440001', 'name': 'Corte', 'price': '45.00', 'duration': 30},
                    {'id': '770e8400-e29b-41d4-a716-446655440002', 'name': 'Barba', 'price': '35.00', 'duration': 20},
                ],
                'total_duration_minutes': 50,
                'created_at': '2024-12-01T10:00:00Z',
                'updated_at': '2024-12-01T10:00:00Z'
            },
            response_only=True
        )
    ]
)
class PackageSerializer(serializers.ModelSerializer):
    """Read serializer for Package model"""
    services = serializers.SerializerMethodField()
    total_duration_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = Package
        fields = [
            'id', 'name', 'description', 'plan_type', 'base_price',
            'discount_amount', 'final_price', 'is_active', 'services',
            'total_duration_minutes', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_services(self, obj):
        return ServiceSummarySerializer(obj.ordered_services, many=True).data


class PackageCreateSerializer(serializers.Serializer):
    """Input for creating a package"""
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    plan_type = serializers.ChoiceField(choices=PLAN_TYPES)
    service_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
    discount_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        default=Decimal('0')
    )

    def validate_service_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate services are not allowed")
        return value


class PackageUpdateSerializer(serializers.Serializer):
    """Input for partially updating a package"""
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    plan_type = serializers.ChoiceField(choices=PLAN_TYPES, required=False)
    service_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1, required=False)
    discount_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )
    is_active = serializers.BooleanField(required=False)

    def validate_service_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate services are not allowed")
        return value


class SubscriptionsCountSerializer(serializers.Serializer):
    package_id = serializers.UUIDField()
    active_subscriptions = serializers.IntegerField()
