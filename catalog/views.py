"""Read-only viewsets for catalog resources."""

from django_filters import rest_framework as filters
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, extend_schema_view, inline_serializer
from rest_framework import generics, viewsets
from rest_framework import serializers as rf_serializers
from rest_framework.decorators import action
from rest_framework.response import Response

from . import selectors
from .models import Product
from .serializers import BannerSerializer, CategorySerializer, ProductDetailSerializer, ProductListSerializer


def _positive_int(value, default: int, ceiling: int = 50) -> int:
    try:
        return max(1, min(int(value), ceiling))
    except (TypeError, ValueError):
        return default


@extend_schema_view(
    list=extend_schema(
        summary="List categories",
        description="Returns active categories ordered by name",
        tags=["Catalog Endpoints"],
    ),
    retrieve=extend_schema(
        summary="Get category by slug",
        tags=["Catalog Endpoints"],
        examples=[
            OpenApiExample(
                "Category detail",
                value={
                    "id": 1,
                    "name": "Fruits",
                    "slug": "fruits",
                    "description": "Fresh seasonal fruit",
                    "icon_url": "https://cdn.example.com/icons/fruits.png",
                },
                response_only=True,
            )
        ],
    ),
)
class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = CategorySerializer
    lookup_field = "slug"
    throttle_scope = "catalog"

    def get_queryset(self):
        return selectors.list_categories()

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List products in category",
        responses=ProductListSerializer(many=True),
    )
    @action(detail=True, methods=["get"], url_path="products")
    def products(self, request, slug=None):
        category = selectors.get_category(slug=slug)
        qs = selectors.list_products(category_id=category.id)
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(ProductListSerializer(page, many=True).data)


class ProductFilterSet(filters.FilterSet):
    category = filters.CharFilter(field_name="category__slug")
    category_id = filters.NumberFilter(field_name="category_id")
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["category", "category_id", "min_price", "max_price"]


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description=(
            "Active products with `average_rating` and `review_count`. Filter by `category` (slug), "
            "`category_id`, `min_price`, `max_price`; search name/description via `search` or `q`; "
            "sort with `sort_by` (name, price, created_at, rating) and `sort_order` (asc, desc)."
        ),
        tags=["Catalog Endpoints"],
        parameters=[
            OpenApiParameter("search", OpenApiTypes.STR, location="query", description="Search products by text"),
            OpenApiParameter("q", OpenApiTypes.STR, location="query", description="Alias for `search`"),
            OpenApiParameter("sort_by", OpenApiTypes.STR, location="query", enum=list(selectors.SORT_FIELDS)),
            OpenApiParameter("sort_order", OpenApiTypes.STR, location="query", enum=["asc", "desc"]),
        ],
    ),
    retrieve=extend_schema(summary="Get product", tags=["Catalog Endpoints"]),
)
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    lookup_value_regex = "[0-9]+"
    filterset_class = ProductFilterSet
    filter_backends = [filters.DjangoFilterBackend]
    throttle_scope = "catalog"

    def get_queryset(self):
        params = self.request.query_params
        if self.action == "list":
            return selectors.list_products(
                search=params.get("search") or params.get("q"),
                sort_by=params.get("sort_by") or "created_at",
                sort_order=params.get("sort_order") or "desc",
            )
        return selectors.with_ratings(selectors.active_products())

    def get_serializer_class(self):
        return ProductDetailSerializer if self.action == "retrieve" else ProductListSerializer

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Similar products",
        description="Active products in the same category, newest first (default 4).",
        parameters=[OpenApiParameter("limit", OpenApiTypes.INT, location="query")],
        responses=ProductListSerializer(many=True),
    )
    @action(detail=True, methods=["get"], url_path="similar")
    def similar(self, request, pk=None):
        product = selectors.get_product(product_id=pk)
        limit = _positive_int(request.query_params.get("limit"), default=0, ceiling=20) or None
        qs = selectors.get_similar_products(product=product, limit=limit)
        return Response(ProductListSerializer(qs, many=True).data)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Search suggestions",
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, location="query", required=True),
            OpenApiParameter("limit", OpenApiTypes.INT, location="query"),
        ],
        responses=inline_serializer(
            name="SearchSuggestions", fields={"suggestions": rf_serializers.ListField(child=rf_serializers.CharField())}
        ),
        examples=[OpenApiExample("Suggestions", value={"suggestions": ["Alphonso Mango", "Mango Pickle"]})],
    )
    @action(detail=False, methods=["get"], url_path="suggestions", filter_backends=[])
    def suggestions(self, request):
        limit = _positive_int(request.query_params.get("limit"), default=0, ceiling=20) or None
        names = selectors.get_search_suggestions(query=request.query_params.get("q", ""), limit=limit)
        return Response({"suggestions": names})

    @extend_schema(tags=["Catalog Endpoints"], summary="Featured products", responses=ProductListSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="featured", filter_backends=[])
    def featured(self, request):
        limit = _positive_int(request.query_params.get("limit"), default=0) or None
        return Response(ProductListSerializer(selectors.get_featured_products(limit=limit), many=True).data)

    @extend_schema(tags=["Catalog Endpoints"], summary="Trending products", responses=ProductListSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="trending", filter_backends=[])
    def trending(self, request):
        limit = _positive_int(request.query_params.get("limit"), default=0) or None
        return Response(ProductListSerializer(selectors.get_trending_products(limit=limit), many=True).data)


class BannerListView(generics.ListAPIView):
    """Active hero banners in display order."""

    serializer_class = BannerSerializer
    pagination_class = None
    filter_backends = []
    throttle_scope = "catalog"

    def get_queryset(self):
        return selectors.list_active_banners()

    @extend_schema(tags=["Catalog Endpoints"], summary="List active banners")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
