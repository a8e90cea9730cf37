"""
Package views
"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from . import package_service
from .serializers import (
    PackageSerializer,
    PackageCreateSerializer,
    PackageUpdateSerializer,
    SubscriptionsCountSerializer,
)


class PackageViewSet(viewsets.ViewSet):
    """
    ViewSet for service packages.

    All writes go through the package service so pricing and the
    deactivation guard are enforced in one place.
    """
    lookup_value_regex = '[0-9a-f-]{36}'

    @extend_schema(
        summary="List packages",
        parameters=[
            OpenApiParameter('is_active', bool, description='Filter by active status'),
        ],
        responses={200: PackageSerializer(many=True)},
        tags=['Packages']
    )
    def list(self, request):
        is_active = request.query_params.get('is_active')
        if is_active is not None:
            is_active = is_active.lower() in ('true', '1', 'yes')
        packages = package_service.list_packages(is_active=is_active)
        return Response(PackageSerializer(packages, many=True).data)

    @extend_schema(
        summary="Get package",
        responses={200: PackageSerializer, 404: OpenApiResponse(description="Package not found")},
        tags=['Packages']
    )
    def retrieve(self, request, pk=None):
        return Response(PackageSerializer(package_service.get_package(pk)).data)

    @extend_schema(
        summary="Create package",
        description="base_price is the sum of the selected services; final_price = base_price - discount_amount.",
        request=PackageCreateSerializer,
        responses={
            201: PackageSerializer,
            400: OpenApiResponse(description="Invalid services or discount exceeds base price")
        },
        tags=['Packages']
    )
    def create(self, request):
        serializer = PackageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        package = package_service.create_package(**serializer.validated_data)
        return Response(PackageSerializer(package).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Update package",
        request=PackageUpdateSerializer,
        responses={
            200: PackageSerializer,
            400: OpenApiResponse(description="Invalid services or discount exceeds base price"),
            404: OpenApiResponse(description="Package not found"),
            409: OpenApiResponse(description="Package still has active subscriptions")
        },
        tags=['Packages']
    )
    def partial_update(self, request, pk=None):
        serializer = PackageUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        package = package_service.update_package(pk, serializer.validated_data)
        return Response(PackageSerializer(package).data)

    @extend_schema(
        summary="Deactivate package",
        description="Soft delete. Blocked while active or paused subscriptions use the package.",
        responses={
            200: PackageSerializer,
            404: OpenApiResponse(description="Package not found"),
            409: OpenApiResponse(description="Package still has active subscriptions")
        },
        tags=['Packages']
    )
    def destroy(self, request, pk=None):
        package_service.deactivate_package(pk)
        return Response(PackageSerializer(package_service.get_package(pk)).data)

    @extend_schema(
        summary="Count active subscriptions",
        responses={200: SubscriptionsCountSerializer},
        tags=['Packages']
    )
    @action(detail=True, methods=['get'], url_path='subscriptions-count')
    def subscriptions_count(self, request, pk=None):
        package = package_service.get_package(pk)
        return Response({
            'package_id': package.id,
            'active_subscriptions': package_service.count_active_subscriptions(package.id),
        })
