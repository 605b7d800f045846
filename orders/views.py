"""Orders API endpoints.

Order creation and cancellation are idempotent when the client sends an
``Idempotency-Key`` header.
"""

from common.choices import OrderStatus
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_order, list_orders
from .serializers import (
    OrderCreateSerializer,
    OrderListSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    OrderStatusUpdateSerializer,
    ReorderResultSerializer,
)
from .services import (
    cancel_order,
    compute_request_hash,
    create_order,
    get_order_stats,
    reorder,
    update_order_status,
    with_idempotency,
)

IDEMPOTENCY_HEADER = OpenApiParameter(
    name="Idempotency-Key",
    location=OpenApiParameter.HEADER,
    required=False,
    description="Makes the request idempotent within scope+path+method",
    type=str,
)


def _respond(request, handler):
    idem_key = request.headers.get("Idempotency-Key")
    if idem_key:
        body, code = with_idempotency(
            key=idem_key,
            user=request.user,
            path=str(request.path),
            method=str(request.method),
            request_hash=compute_request_hash(getattr(request, "data", None)),
            handler=handler,
        )
        return Response(body, status=code)
    body, code = handler()
    return Response(body, status=code)


class OrderListCreateView(generics.ListAPIView):
    """List the caller's orders (newest first) or place a new one from the cart."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderListSerializer
    filter_backends = []

    def get_throttles(self):
        self.throttle_scope = "orders_write" if self.request.method == "POST" else "orders"
        return super().get_throttles()

    def get_queryset(self):
        return list_orders(user=self.request.user, status=self.request.query_params.get("status") or None)

    @extend_schema(
        tags=["Orders"],
        summary="List orders",
        parameters=[OpenApiParameter("status", OpenApiTypes.STR, enum=OrderStatus.values)],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Orders"],
        summary="Place order",
        description=(
            "Converts the live cart into a pending order: checks stock, applies the promo code and "
            "delivery fee, decrements inventory, empties the cart and notifies the customer."
        ),
        request=OrderCreateSerializer,
        parameters=[IDEMPOTENCY_HEADER],
        responses={201: OrderSerializer},
        examples=[
            OpenApiExample(
                "Place order",
                value={"address_id": 3, "delivery_instructions": "Ring twice", "promo_code": "FIRST10"},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def _handler():
            order = create_order(user=request.user, **serializer.validated_data)
            return OrderSerializer(get_order(order_id=order.id)).data, status.HTTP_201_CREATED

        return _respond(request, _handler)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(tags=["Orders"], summary="Get order detail", responses=OrderSerializer)
    def get(self, request, order_id: int):
        return Response(OrderSerializer(get_order(order_id=order_id, user=request.user)).data)


class OrderCancelView(APIView):
    """Cancel a pending order for the authenticated owner."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Cancel order",
        description="Cancels the order while it is pending and returns its stock.",
        request=None,
        parameters=[IDEMPOTENCY_HEADER],
        responses={200: OrderSerializer},
    )
    def post(self, request, order_id: int):
        order = get_order(order_id=order_id, user=request.user)

        def _handler():
            updated = cancel_order(user=request.user, order=order)
            return OrderSerializer(get_order(order_id=updated.id)).data, status.HTTP_200_OK

        return _respond(request, _handler)


class OrderReorderView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Reorder",
        description="Adds every line of a past order back into the cart at current prices.",
        request=None,
        responses=ReorderResultSerializer,
    )
    def post(self, request, order_id: int):
        order = get_order(order_id=order_id, user=request.user)
        return Response(ReorderResultSerializer(reorder(user=request.user, order=order)).data)


class OrderStatsView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(tags=["Orders"], summary="Order statistics", responses=OrderStatsSerializer)
    def get(self, request):
        return Response(OrderStatsSerializer(get_order_stats(user=request.user)).data)


class OrderStatusUpdateView(APIView):
    """Staff endpoint driving the fulfilment lifecycle."""

    permission_classes = [IsAdminUser]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Update order status (staff)",
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer},
        examples=[OpenApiExample("Ship", value={"status": "shipped"}, request_only=True)],
    )
    def post(self, request, order_id: int):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = update_order_status(
            order=get_order(order_id=order_id), status=serializer.validated_data["status"], actor=request.user
        )
        return Response(OrderSerializer(get_order(order_id=order.id)).data)
