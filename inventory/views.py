"""Staff inventory endpoints: movement log, low-stock report and adjustments."""

from django.utils.dateparse import parse_datetime
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import list_low_stock, list_movements
from .serializers import MovementCreateSerializer, StockLevelSerializer, StockMovementSerializer
from .services import apply_movement


class MovementListCreateView(generics.ListAPIView):
    permission_classes = [permissions.IsAdminUser]
    serializer_class = StockMovementSerializer
    filter_backends = []
    throttle_scope = "catalog"

    def get_queryset(self):
        params = self.request.query_params
        created_after = params.get("created_after")
        return list_movements(
            product_id=params.get("product_id"),
            reason=params.get("reason"),
            reference=params.get("reference"),
            created_after=parse_datetime(created_after) if created_after else None,
        )

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="List stock movements",
        parameters=[
            OpenApiParameter("product_id", OpenApiTypes.INT, location="query"),
            OpenApiParameter("reason", OpenApiTypes.STR, location="query"),
            OpenApiParameter("reference", OpenApiTypes.STR, location="query", description="e.g. order:ORD-000042"),
            OpenApiParameter("created_after", OpenApiTypes.DATETIME, location="query"),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Restock or adjust a product",
        request=MovementCreateSerializer,
        responses={201: StockMovementSerializer},
        examples=[OpenApiExample("Restock", value={"product_id": 7, "quantity": 24, "reason": "restock"})],
    )
    def post(self, request):
        serializer = MovementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        movement = apply_movement(**serializer.validated_data)
        return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


class LowStockView(APIView):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "catalog"

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Products running low",
        parameters=[OpenApiParameter("threshold", OpenApiTypes.INT, location="query")],
        responses=StockLevelSerializer(many=True),
    )
    def get(self, request):
        try:
            threshold = max(0, int(request.query_params.get("threshold", 5)))
        except ValueError:
            threshold = 5
        return Response(StockLevelSerializer(list_low_stock(threshold=threshold), many=True).data)
