"""
Subscription serializers for API endpoints.
"""
from rest_framework import serializers

from apps.appointments.serializers import AppointmentSerializer
from apps.core.utils.constants import MAX_DURATION_MONTHS, MIN_DURATION_MONTHS, PLAN_TYPES
from .models import Subscription, SubscriptionChangeLog


class SubscriptionChangeLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubscriptionChangeLog
        fields = [
            'id', 'change_type', 'description', 'old_value', 'new_value',
            'reason', 'created_at'
        ]
        read_only_fields = fields


class SubscriptionSerializer(serializers.ModelSerializer):
    """
    Serializer for Subscription model.
    Used for list views and embedded pending-work responses.
    """
    client_name = serializers.CharField(source='client.name', read_only=True)
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    package_name = serializers.CharField(source='package.name', read_only=True, default=None)
    service_name = serializers.CharField(source='service.name', read_only=True, default=None)
    completed_slots = serializers.SerializerMethodField()

    class Meta:
        model = Subscription
        fields = [
            'id', 'client', 'client_name', 'barber', 'barber_name',
            'package', 'package_name', 'service', 'service_name',
            'plan_type', 'status', 'start_date', 'end_date',
            'duration_months', 'total_slots', 'completed_slots', 'notes',
            'paused_at', 'cancelled_at', 'cancellation_reason',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_completed_slots(self, obj):
        # Annotated by list_subscriptions
        count = getattr(obj, 'completed_slot_count', None)
        return obj.completed_slots if count is None else count


class SubscriptionDetailSerializer(SubscriptionSerializer):
    """Subscription with its slots and the latest change logs"""
    appointments = AppointmentSerializer(many=True, read_only=True)
    change_logs = serializers.SerializerMethodField()

    class Meta(SubscriptionSerializer.Meta):
        fields = SubscriptionSerializer.Meta.fields + ['appointments', 'change_logs']
        read_only_fields = fields

    def get_change_logs(self, obj):
        return SubscriptionChangeLogSerializer(obj.change_logs.all()[:20], many=True).data


class SubscriptionPreviewRequestSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    barber_id = serializers.UUIDField()
    package_id = serializers.UUIDField()
    start_date = serializers.DateTimeField()
    duration_months = serializers.IntegerField(
        min_value=MIN_DURATION_MONTHS,
        max_value=MAX_DURATION_MONTHS
    )


class SlotAdjustmentSerializer(serializers.Serializer):
    slot_index = serializers.IntegerField(min_value=0)
    new_date = serializers.DateTimeField()
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class SubscriptionCreateSerializer(SubscriptionPreviewRequestSerializer):
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    adjustments = SlotAdjustmentSerializer(many=True, required=False, default=list)


class SubscriptionUpdateSerializer(serializers.Serializer):
    plan_type = serializers.ChoiceField(choices=PLAN_TYPES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class ReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class ResumeSerializer(ReasonSerializer):
    new_start_date = serializers.DateTimeField()


class ConflictDetailsSerializer(serializers.Serializer):
    existing_appointment_id = serializers.UUIDField()
    existing_client_name = serializers.CharField()
    existing_start_time = serializers.DateTimeField()
    existing_end_time = serializers.DateTimeField()


class SlotPreviewSerializer(serializers.Serializer):
    slot_index = serializers.IntegerField()
    date = serializers.DateTimeField()
    barber_id = serializers.UUIDField()
    barber_name = serializers.CharField()
    package_id = serializers.UUIDField()
    package_name = serializers.CharField()
    duration = serializers.IntegerField()
    has_conflict = serializers.BooleanField()
    conflict_details = ConflictDetailsSerializer(allow_null=True)


class PlanSummarySerializer(serializers.Serializer):
    plan_type = serializers.CharField()
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    duration_months = serializers.IntegerField()
    total_slots = serializers.IntegerField()
    interval_days = serializers.IntegerField()
    final_price = serializers.DecimalField(max_digits=10, decimal_places=2)


class SubscriptionPreviewSerializer(serializers.Serializer):
    subscription = PlanSummarySerializer()
    appointments = SlotPreviewSerializer(many=True)
    has_any_conflict = serializers.BooleanField()
    conflict_count = serializers.IntegerField()
