"""
Appointment views
"""
from rest_framework import viewsets
from drf_spectacular.utils import extend_schema, OpenApiParameter
from django_filters import rest_framework as filters
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import OrderingFilter

from .models import Appointment
from .serializers import AppointmentSerializer, AppointmentWriteSerializer


class AppointmentFilter(filters.FilterSet):
    date_from = filters.IsoDateTimeFilter(field_name='date', lookup_expr='gte')
    date_to = filters.IsoDateTimeFilter(field_name='date', lookup_expr='lt')

    class Meta:
        model = Appointment
        fields = ['barber', 'client', 'status', 'subscription', 'is_subscription_based']


class AppointmentViewSet(viewsets.ModelViewSet):
    """ViewSet for single appointments and subscription slots"""
    queryset = Appointment.objects.select_related(
        'client', 'barber', 'service'
    ).prefetch_related('appointment_services__service')
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AppointmentFilter
    ordering_fields = ['date', 'created_at']
    ordering = ['-date']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_serializer_class(self):
        if self.action in ['create', 'partial_update']:
            return AppointmentWriteSerializer
        return AppointmentSerializer

    @extend_schema(
        summary="List appointments",
        parameters=[
            OpenApiParameter('date_from', str, description='ISO datetime lower bound'),
            OpenApiParameter('date_to', str, description='ISO datetime upper bound'),
        ],
        responses={200: AppointmentSerializer(many=True)},
        tags=['Appointments']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
