"""
Service views
"""
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from .models import Service
from .serializers import ServiceSerializer


class ServiceViewSet(viewsets.ModelViewSet):
    """ViewSet for managing the service catalog"""
    queryset = Service.objects.all()
    serializer_class = ServiceSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'price', 'duration_minutes', 'created_at']
    ordering = ['name']
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    @extend_schema(
        summary="List services",
        parameters=[
            OpenApiParameter('is_active', bool, description='Filter by active status'),
            OpenApiParameter('search', str, description='Search in name and description'),
        ],
        responses={200: ServiceSerializer(many=True)},
        tags=['Services']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Deactivate service",
        description="Services are soft-deleted: the record stays so packages and past appointments keep their references.",
        responses={
            200: ServiceSerializer,
            404: OpenApiResponse(description="Service not found")
        },
        tags=['Services']
    )
    def destroy(self, request, *args, **kwargs):
        service = self.get_object()
        service.is_active = False
        service.save(update_fields=['is_active', 'updated_at'])
        return Response(ServiceSerializer(service).data)

    @extend_schema(
        summary="Toggle service active status",
        request=None,
        responses={200: ServiceSerializer},
        tags=['Services']
    )
    @action(detail=True, methods=['patch'])
    def toggle_active(self, request, pk=None):
        """Toggle service active status"""
        service = self.get_object()
        service.is_active = not service.is_active
        service.save(update_fields=['is_active', 'updated_at'])
        return Response(ServiceSerializer(service).data)
