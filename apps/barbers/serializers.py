"""
Barber serializers
"""
from rest_framework import serializers

from apps.appointments.serializers import AppointmentSerializer
from apps.core.utils.constants import DEACTIVATION_ACTIONS
from apps.services.serializers import ServiceSummarySerializer
from apps.subscriptions.serializers import SubscriptionSerializer
from .models import Barber


class BarberSerializer(serializers.ModelSerializer):
    """
    Serializer for Barber model.
    is_active is read-only: deactivation goes through the deactivate action.
    """
    services = ServiceSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Barber
        fields = [
            'id', 'name', 'phone', 'email', 'specialties', 'services',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']

    def validate_specialties(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Specialties must be a list of strings")
        return value


class DeactivateBarberSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=DEACTIVATION_ACTIONS)
    target_barber_id = serializers.UUIDField(required=False, allow_null=True)


class DeactivationResultSerializer(serializers.Serializer):
    barber = BarberSerializer()
    appointments_affected = serializers.IntegerField()
    subscriptions_affected = serializers.IntegerField()
    action = serializers.CharField()
    target_barber_id = serializers.UUIDField(allow_null=True)


class PendingWorkSerializer(serializers.Serializer):
    appointments = AppointmentSerializer(many=True)
    subscriptions = SubscriptionSerializer(many=True)


class AssignServiceSerializer(serializers.Serializer):
    service_id = serializers.UUIDField()
