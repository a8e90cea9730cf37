"""
Appointment serializers
"""
from django.db import transaction
from rest_framework import serializers

from apps.services.serializers import ServiceSummarySerializer
from apps.subscriptions.utils.conflict_detector import find_conflicting_appointment
from .models import Appointment, AppointmentService


class AppointmentSerializer(serializers.ModelSerializer):
    """Read serializer for Appointment model"""
    client_name = serializers.CharField(source='client.name', read_only=True)
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    services = serializers.SerializerMethodField()
    duration_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'client', 'client_name', 'barber', 'barber_name', 'service',
            'services', 'subscription', 'is_subscription_based',
            'subscription_slot_index', 'date', 'status', 'notes',
            'duration_minutes', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_services(self, obj):
        return ServiceSummarySerializer(
            [link.service for link in obj.appointment_services.all()],
            many=True
        ).data


class AppointmentWriteSerializer(serializers.ModelSerializer):
    """Serializer for booking and editing single appointments"""

    class Meta:
        model = Appointment
        fields = ['id', 'client', 'barber', 'service', 'date', 'status', 'notes']
        read_only_fields = ['id']
        extra_kwargs = {'service': {'required': True, 'allow_null': False}}

    def validate_barber(self, value):
        if not value.is_active:
            raise serializers.ValidationError("Barber is inactive")
        return value

    def validate_client(self, value):
        if not value.is_active:
            raise serializers.ValidationError("Client is inactive")
        return value

    def validate_service(self, value):
        if value is not None and not value.is_active:
            raise serializers.ValidationError("Service is inactive")
        return value

    def validate(self, attrs):
        barber = attrs.get('barber', getattr(self.instance, 'barber', None))
        service = attrs.get('service', getattr(self.instance, 'service', None))
        date = attrs.get('date', getattr(self.instance, 'date', None))

        if 'service' in attrs and self.instance is not None and self.instance.is_subscription_based:
            raise serializers.ValidationError({
                'service': "Services of a subscription slot follow its package"
            })

        if self.instance is None or any(field in attrs for field in ('date', 'barber', 'service')):
            exclude = [self.instance.id] if self.instance else None
            if self.instance is None or 'service' in attrs:
                duration = service.duration_minutes
            else:
                duration = self.instance.duration_minutes
            conflict = find_conflicting_appointment(barber.id, date, duration, exclude_ids=exclude)
            if conflict is not None:
                raise serializers.ValidationError({
                    'date': f"Barber already has an appointment at {conflict.date.isoformat()}"
                })
        return attrs

    def create(self, validated_data):
        with transaction.atomic():
            appointment = super().create(validated_data)
            AppointmentService.objects.create(appointment=appointment, service=appointment.service)
        return appointment

    def update(self, instance, validated_data):
        with transaction.atomic():
            appointment = super().update(instance, validated_data)
            if 'service' in validated_data:
                # The rendered services mirror the booked one
                AppointmentService.objects.filter(appointment=appointment).delete()
                AppointmentService.objects.create(appointment=appointment, service=appointment.service)
        return appointment
