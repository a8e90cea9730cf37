"""
Barber views
"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from . import services as barber_services
from .models import Barber
from .serializers import (
    AssignServiceSerializer,
    BarberSerializer,
    DeactivateBarberSerializer,
    DeactivationResultSerializer,
    PendingWorkSerializer,
)


class BarberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing barbers.

    Barbers are never deleted; use the deactivate action to hand over
    or cancel their pending work.
    """
    queryset = Barber.objects.prefetch_related('services')
    serializer_class = BarberSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'email', 'phone']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']
    lookup_value_regex = '[0-9a-f-]{36}'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    @extend_schema(
        summary="List barbers",
        parameters=[
            OpenApiParameter('is_active', bool, description='Filter by active status'),
        ],
        responses={200: BarberSerializer(many=True)},
        tags=['Barbers']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(exclude=True)
    def destroy(self, request, *args, **kwargs):
        return Response(
            {'detail': 'Barbers cannot be deleted. Use the deactivate action.'},
            status=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    @extend_schema(
        summary="Pending work of a barber",
        description="Scheduled or in-progress appointments from now on, plus active and paused subscriptions.",
        responses={200: PendingWorkSerializer, 404: OpenApiResponse(description="Barber not found")},
        tags=['Barbers']
    )
    @action(detail=True, methods=['get'], url_path='pending-appointments')
    def pending_appointments(self, request, pk=None):
        pending = barber_services.get_pending_appointments(pk)
        return Response(PendingWorkSerializer(pending).data)

    @extend_schema(
        summary="Deactivate barber",
        description=(
            "Deactivates the barber and either transfers pending appointments and "
            "subscriptions to target_barber_id or cancels them. All changes are atomic."
        ),
        request=DeactivateBarberSerializer,
        responses={
            200: DeactivationResultSerializer,
            400: OpenApiResponse(description="Invalid action, missing target or self-transfer"),
            404: OpenApiResponse(description="Barber or target barber not found")
        },
        tags=['Barbers']
    )
    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        serializer = DeactivateBarberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = barber_services.deactivate_with_action(
            pk,
            serializer.validated_data['action'],
            serializer.validated_data.get('target_barber_id'),
        )
        return Response(DeactivationResultSerializer(result).data)

    @extend_schema(
        summary="Reactivate barber",
        request=None,
        responses={200: BarberSerializer},
        tags=['Barbers']
    )
    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        barber = self.get_object()
        barber.is_active = True
        barber.save(update_fields=['is_active', 'updated_at'])
        return Response(BarberSerializer(barber).data)

    @extend_schema(
        summary="Assign service to barber",
        request=AssignServiceSerializer,
        responses={201: BarberSerializer},
        tags=['Barbers']
    )
    @action(detail=True, methods=['post'], url_path='services')
    def assign_service(self, request, pk=None):
        serializer = AssignServiceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        barber_services.assign_service(pk, serializer.validated_data['service_id'])
        barber = self.get_object()
        return Response(BarberSerializer(barber).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Remove service from barber",
        responses={204: None},
        tags=['Barbers']
    )
    @action(detail=True, methods=['delete'], url_path=r'services/(?P<service_id>[0-9a-f-]{36})')
    def remove_service(self, request, pk=None, service_id=None):
        barber_services.remove_service(pk, service_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
