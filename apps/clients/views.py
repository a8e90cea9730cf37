"""
Client views
"""
from rest_framework import viewsets
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from .models import Client
from .serializers import ClientSerializer


class ClientViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Client model.
    """
    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'phone', 'email']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    @extend_schema(
        summary="List clients",
        parameters=[
            OpenApiParameter('is_active', bool, description='Filter by active status'),
            OpenApiParameter('search', str, description='Search in name, phone and email'),
        ],
        responses={200: ClientSerializer(many=True)},
        tags=['Clients']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Deactivate client",
        responses={
            200: ClientSerializer,
            404: OpenApiResponse(description="Client not found")
        },
        tags=['Clients']
    )
    def destroy(self, request, *args, **kwargs):
        client = self.get_object()
        client.is_active = False
        client.save(update_fields=['is_active', 'updated_at'])
        return Response(ClientSerializer(client).data)
