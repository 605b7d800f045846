"""DRF views for cart operations."""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import cart_item_count, get_cart_with_totals
from .serializers import AddItemSerializer, CartItemReadSerializer, CartReadSerializer, UpdateItemQuantitySerializer
from .services import add_item, clear_cart, remove_item, update_item

ErrorResponse = inline_serializer(
    name="CartError",
    fields={"detail": rf_serializers.CharField(), "code": rf_serializers.CharField()},
)


def _cart_response(user, status_code=status.HTTP_200_OK):
    return Response(CartReadSerializer(get_cart_with_totals(user=user)).data, status=status_code)


class CartDetailView(APIView):
    """Return the authenticated user's live cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get live cart",
        description="Returns the user's live cart with its lines and derived totals.",
        responses=CartReadSerializer,
        examples=[
            OpenApiExample(
                "Cart",
                value={
                    "id": 1,
                    "expires_at": "2025-01-08T10:00:00Z",
                    "items": [
                        {
                            "id": 10,
                            "product": {
                                "id": 7,
                                "name": "Alphonso Mango",
                                "price": "120.00",
                                "image_url": "",
                                "inventory": 40,
                            },
                            "variant": {"size": "1kg"},
                            "quantity": 2,
                            "price_snapshot": "120.00",
                            "line_total": "240.00",
                        }
                    ],
                    "total_amount": "240.00",
                    "total_items": 2,
                },
            )
        ],
    )
    def get(self, request):
        return _cart_response(request.user)


class CartAddItemView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description="Adds a product (and optional variant) to the live cart. Repeated adds increment the line.",
        request=AddItemSerializer,
        responses={201: CartItemReadSerializer, 400: ErrorResponse, 404: ErrorResponse},
        examples=[OpenApiExample("Add", value={"product_id": 7, "quantity": 2, "variant": {"size": "1kg"}})],
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = add_item(user=request.user, **serializer.validated_data)
        return Response(CartItemReadSerializer(item).data, status=status.HTTP_201_CREATED)


class CartItemUpdateView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart item quantity",
        description="Sets the line quantity. A quantity of zero or less removes the line (204).",
        request=UpdateItemQuantitySerializer,
        responses={200: CartItemReadSerializer, 204: None, 404: ErrorResponse},
    )
    def patch(self, request, item_id: int):
        serializer = UpdateItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = update_item(user=request.user, item_id=item_id, quantity=serializer.validated_data["quantity"])
        if item is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(CartItemReadSerializer(item).data)


class CartItemDeleteView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(tags=["Cart Endpoints"], summary="Remove cart item", responses={204: None, 404: ErrorResponse})
    def delete(self, request, item_id: int):
        remove_item(user=request.user, item_id=item_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CartClearView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Clear cart",
        description="Removes every line from the live cart and returns the now empty cart.",
        request=None,
        responses=CartReadSerializer,
    )
    def post(self, request):
        clear_cart(user=request.user)
        return _cart_response(request.user)


class CartCountView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Cart item count",
        responses=inline_serializer(name="CartCount", fields={"count": rf_serializers.IntegerField()}),
    )
    def get(self, request):
        return Response({"count": cart_item_count(user=request.user)})
