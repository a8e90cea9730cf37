"""
Subscription views
"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from . import subscription_service
from .serializers import (
    ReasonSerializer,
    ResumeSerializer,
    SubscriptionCreateSerializer,
    SubscriptionDetailSerializer,
    SubscriptionPreviewRequestSerializer,
    SubscriptionPreviewSerializer,
    SubscriptionSerializer,
    SubscriptionUpdateSerializer,
)


class SubscriptionViewSet(viewsets.ViewSet):
    """
    ViewSet for client subscriptions.

    Lifecycle changes (pause, resume, cancel) are explicit actions.
    """
    lookup_value_regex = '[0-9a-f-]{36}'

    @extend_schema(
        summary="List subscriptions",
        parameters=[
            OpenApiParameter('client', str, description='Filter by client id'),
            OpenApiParameter('barber', str, description='Filter by barber id'),
            OpenApiParameter('status', str, description='Filter by status'),
        ],
        responses={200: SubscriptionSerializer(many=True)},
        tags=['Subscriptions']
    )
    def list(self, request):
        subscriptions = subscription_service.list_subscriptions(
            client_id=request.query_params.get('client'),
            barber_id=request.query_params.get('barber'),
            status=request.query_params.get('status'),
        )
        return Response(SubscriptionSerializer(subscriptions, many=True).data)

    @extend_schema(
        summary="Get subscription",
        responses={200: SubscriptionDetailSerializer, 404: OpenApiResponse(description="Subscription not found")},
        tags=['Subscriptions']
    )
    def retrieve(self, request, pk=None):
        subscription = subscription_service.get_subscription(pk)
        return Response(SubscriptionDetailSerializer(subscription).data)

    @extend_schema(
        summary="Preview subscription",
        description="Generates the slot dates and flags conflicts without saving anything.",
        request=SubscriptionPreviewRequestSerializer,
        responses={
            200: SubscriptionPreviewSerializer,
            404: OpenApiResponse(description="Client, barber or package not found"),
            409: OpenApiResponse(description="Client already has an active subscription")
        },
        tags=['Subscriptions']
    )
    @action(detail=False, methods=['post'])
    def preview(self, request):
        serializer = SubscriptionPreviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        preview = subscription_service.preview_subscription(**serializer.validated_data)
        return Response(SubscriptionPreviewSerializer(preview).data)

    @extend_schema(
        summary="Create subscription",
        request=SubscriptionCreateSerializer,
        responses={
            201: SubscriptionDetailSerializer,
            400: OpenApiResponse(description="Conflicts remain in the slot dates"),
            409: OpenApiResponse(description="Client already has an active subscription")
        },
        tags=['Subscriptions']
    )
    def create(self, request):
        serializer = SubscriptionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = subscription_service.create_subscription(**serializer.validated_data)
        return Response(SubscriptionDetailSerializer(subscription).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Update subscription",
        description="Changing plan_type re-spaces the pending slots.",
        request=SubscriptionUpdateSerializer,
        responses={200: SubscriptionDetailSerializer},
        tags=['Subscriptions']
    )
    def partial_update(self, request, pk=None):
        serializer = SubscriptionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = subscription_service.update_subscription(pk, **serializer.validated_data)
        return Response(SubscriptionDetailSerializer(subscription).data)

    @extend_schema(
        summary="Pause subscription",
        request=ReasonSerializer,
        responses={200: SubscriptionDetailSerializer},
        tags=['Subscriptions']
    )
    @action(detail=True, methods=['post'])
    def pause(self, request, pk=None):
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = subscription_service.pause_subscription(pk, **serializer.validated_data)
        return Response(SubscriptionDetailSerializer(subscription).data)

    @extend_schema(
        summary="Resume subscription",
        request=ResumeSerializer,
        responses={200: SubscriptionDetailSerializer},
        tags=['Subscriptions']
    )
    @action(detail=True, methods=['post'])
    def resume(self, request, pk=None):
        serializer = ResumeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = subscription_service.resume_subscription(pk, **serializer.validated_data)
        return Response(SubscriptionDetailSerializer(subscription).data)

    @extend_schema(
        summary="Cancel subscription",
        request=ReasonSerializer,
        responses={200: SubscriptionDetailSerializer},
        tags=['Subscriptions']
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = subscription_service.cancel_subscription(pk, **serializer.validated_data)
        return Response(SubscriptionDetailSerializer(subscription).data)
