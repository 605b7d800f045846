"""Serverless-style storefront endpoints.

Thin wrappers over the order, catalog and notification services that keep
the request and response shapes the storefront client already speaks.
"""

import logging

from catalog.selectors import search_products
from catalog.serializers import ProductSearchResultSerializer
from common.exceptions import NotFoundError
from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from notifications.serializers import NotificationSerializer, SendNotificationSerializer
from notifications.services import notify
from orders.selectors import get_order
from orders.serializers import OrderSerializer
from orders.services import compute_request_hash, create_order, with_idempotency
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from .base import FunctionView
from .serializers import CreateOrderRequestSerializer, SearchProductsRequestSerializer

logger = logging.getLogger("freshcart.functions")

ErrorResponse = inline_serializer(name="FunctionError", fields={"error": rf_serializers.CharField()})


class CreateOrderFunction(FunctionView):
    name = "create-order"
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Functions"],
        summary="Create order from cart",
        request=CreateOrderRequestSerializer,
        parameters=[
            OpenApiParameter(
                name="Idempotency-Key",
                location=OpenApiParameter.HEADER,
                required=False,
                description="Replays the stored response for a repeated key",
                type=str,
            )
        ],
        responses={
            200: inline_serializer(
                name="CreateOrderResponse",
                fields={"order": OrderSerializer(), "message": rf_serializers.CharField()},
            ),
            400: ErrorResponse,
            401: ErrorResponse,
        },
        examples=[OpenApiExample("Request", value={"address_id": 3, "promo_code": "SAVE50"}, request_only=True)],
    )
    def post(self, request):
        serializer = CreateOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def _handler():
            order = create_order(user=request.user, **serializer.validated_data)
            order_data = OrderSerializer(get_order(order_id=order.id)).data
            return {"order": order_data, "message": "Order created successfully"}, status.HTTP_200_OK

        idem_key = request.headers.get("Idempotency-Key")
        if idem_key:
            body, code = with_idempotency(
                key=idem_key,
                user=request.user,
                path=str(request.path),
                method=str(request.method),
                request_hash=compute_request_hash(getattr(request, "data", None)),
                handler=_handler,
            )
            if code == status.HTTP_409_CONFLICT:
                return Response({"error": body["detail"]}, status=code)
            return Response(body, status=code)
        body, code = _handler()
        return Response(body, status=code)


class SearchProductsFunction(FunctionView):
    name = "search-products"
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Functions"],
        summary="Search products",
        request=SearchProductsRequestSerializer,
        responses={
            200: inline_serializer(
                name="SearchProductsResponse", fields={"products": ProductSearchResultSerializer(many=True)}
            ),
            400: ErrorResponse,
        },
        examples=[OpenApiExample("Request", value={"query": "mango", "limit": 5}, request_only=True)],
    )
    def post(self, request):
        serializer = SearchProductsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        products = search_products(**serializer.validated_data)
        logger.info(
            "functions.search",
            extra={"event": "functions.search", "query": serializer.validated_data["query"], "hits": len(products)},
        )
        return Response({"products": ProductSearchResultSerializer(products, many=True).data})


class SendNotificationFunction(FunctionView):
    name = "send-notification"
    permission_classes = [IsAdminUser]

    @extend_schema(
        tags=["Functions"],
        summary="Send notification (staff)",
        request=SendNotificationSerializer,
        responses={
            200: inline_serializer(
                name="SendNotificationResponse",
                fields={
                    "notification": NotificationSerializer(),
                    "email_sent": rf_serializers.BooleanField(),
                    "sms_sent": rf_serializers.BooleanField(),
                },
            ),
            400: ErrorResponse,
            401: ErrorResponse,
            403: ErrorResponse,
        },
    )
    def post(self, request):
        serializer = SendNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        try:
            user = get_user_model().objects.get(id=data.pop("user_id"))
        except get_user_model().DoesNotExist:
            raise NotFoundError("User not found") from None

        result = notify(user=user, **data)
        return Response(
            {
                "notification": NotificationSerializer(result["notification"]).data,
                "email_sent": result["email_sent"],
                "sms_sent": result["sms_sent"],
            }
        )
