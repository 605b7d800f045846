"""Wishlist endpoints for the signed-in user."""

from common.exceptions import NotFoundError
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import is_in_wishlist, list_wishlist, wishlist_count
from .serializers import WishlistItemSerializer, WishlistMembershipSerializer, WishlistProductSerializer
from .services import add_to_wishlist, clear_wishlist, remove_from_wishlist, toggle_wishlist


class WishlistView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = WishlistItemSerializer
    filter_backends = []
    throttle_scope = "wishlist"

    def get_queryset(self):
        return list_wishlist(user=self.request.user)

    @extend_schema(tags=["Wishlist Endpoints"], summary="List wishlist")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Add product to wishlist",
        request=WishlistProductSerializer,
        responses={201: WishlistItemSerializer},
    )
    def post(self, request):
        serializer = WishlistProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = add_to_wishlist(user=request.user, **serializer.validated_data)
        return Response(WishlistItemSerializer(item).data, status=status.HTTP_201_CREATED)


class WishlistRemoveView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(tags=["Wishlist Endpoints"], summary="Remove product from wishlist", responses={204: None})
    def delete(self, request, product_id: int):
        if not remove_from_wishlist(user=request.user, product_id=product_id):
            raise NotFoundError("Product is not in your wishlist")
        return Response(status=status.HTTP_204_NO_CONTENT)


class WishlistToggleView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Toggle wishlist membership",
        request=WishlistProductSerializer,
        responses=WishlistMembershipSerializer,
    )
    def post(self, request):
        serializer = WishlistProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product_id = serializer.validated_data["product_id"]
        in_wishlist = toggle_wishlist(user=request.user, product_id=product_id)
        return Response(WishlistMembershipSerializer({"product_id": product_id, "in_wishlist": in_wishlist}).data)


class WishlistContainsView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(tags=["Wishlist Endpoints"], summary="Is product wishlisted", responses=WishlistMembershipSerializer)
    def get(self, request, product_id: int):
        data = {"product_id": product_id, "in_wishlist": is_in_wishlist(user=request.user, product_id=product_id)}
        return Response(WishlistMembershipSerializer(data).data)


class WishlistCountView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Wishlist size",
        responses=inline_serializer(name="WishlistCount", fields={"count": rf_serializers.IntegerField()}),
    )
    def get(self, request):
        return Response({"count": wishlist_count(user=request.user)})


class WishlistClearView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Clear wishlist",
        request=None,
        responses=inline_serializer(name="WishlistCleared", fields={"deleted": rf_serializers.IntegerField()}),
    )
    def post(self, request):
        return Response({"deleted": clear_wishlist(user=request.user)})
