"""Staff viewsets for catalog writes.

Inventory changes made here bypass the stock movement log; use the
inventory restock endpoint for audited adjustments.
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .admin_serializers import (
    BannerAdminSerializer,
    BannerReorderSerializer,
    CategoryAdminSerializer,
    ProductAdminSerializer,
)
from .models import Banner, Category, Product
from .services import reorder_banners, toggle_banner


class AdminBaseViewSet(viewsets.ModelViewSet):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "catalog"


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List categories (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get category (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create category"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update category"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update category"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete category"),
)
class CategoryAdminViewSet(AdminBaseViewSet):
    queryset = Category.objects.all().order_by("sort_order", "name")
    serializer_class = CategoryAdminSerializer


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List products (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get product (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create product"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update product"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update product"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete product"),
)
class ProductAdminViewSet(AdminBaseViewSet):
    queryset = Product.objects.all().select_related("category").order_by("-created_at")
    serializer_class = ProductAdminSerializer
    filterset_fields = ["category", "is_active"]
    search_fields = ["name", "description"]


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List banners (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get banner (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create banner"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update banner"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update banner"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete banner"),
)
class BannerAdminViewSet(AdminBaseViewSet):
    queryset = Banner.objects.all().order_by("sort_order", "id")
    serializer_class = BannerAdminSerializer

    @extend_schema(tags=["Admin Endpoints"], summary="Toggle banner visibility", request=None)
    @action(detail=True, methods=["post"], url_path="toggle")
    def toggle(self, request, pk=None):
        banner = toggle_banner(banner_id=pk)
        return Response(BannerAdminSerializer(banner).data)

    @extend_schema(tags=["Admin Endpoints"], summary="Reorder banners", request=BannerReorderSerializer)
    @action(detail=False, methods=["post"], url_path="reorder")
    def reorder(self, request):
        serializer = BannerReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        banners = reorder_banners(banner_ids=serializer.validated_data["banner_ids"])
        return Response(BannerAdminSerializer(banners, many=True).data, status=status.HTTP_200_OK)
