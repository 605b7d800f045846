"""Review endpoints.

Listing, featured reviews and statistics are public; writing requires a
signed-in shopper and only touches the caller's own reviews.
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import generics, permissions, status
from rest_framework import serializers as rf_serializers
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .serializers import (
    FeatureReviewSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewStatsSerializer,
    ReviewUpdateSerializer,
)
from .services import create_review, delete_review, set_featured, update_review


class ReviewListCreateView(generics.ListAPIView):
    serializer_class = ReviewSerializer
    filter_backends = []
    throttle_scope = "reviews"

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get_queryset(self):
        params = self.request.query_params
        return selectors.list_reviews(product_id=params.get("product") or None, rating=params.get("rating") or None)

    @extend_schema(
        tags=["Review Endpoints"],
        summary="List reviews",
        parameters=[
            OpenApiParameter("product", OpenApiTypes.INT, location="query"),
            OpenApiParameter("rating", OpenApiTypes.INT, location="query"),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Review Endpoints"],
        summary="Review a product",
        request=ReviewCreateSerializer,
        responses={201: ReviewSerializer},
    )
    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = create_review(user=request.user, **serializer.validated_data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Review Endpoints"], summary="Edit own review", request=ReviewUpdateSerializer, responses=ReviewSerializer
    )
    def patch(self, request, review_id: int):
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = update_review(user=request.user, review_id=review_id, **serializer.validated_data)
        return Response(ReviewSerializer(review).data)

    @extend_schema(tags=["Review Endpoints"], summary="Delete own review", responses={204: None})
    def delete(self, request, review_id: int):
        delete_review(user=request.user, review_id=review_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyReviewsView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ReviewSerializer
    filter_backends = []
    throttle_scope = "reviews"

    def get_queryset(self):
        return selectors.list_user_reviews(user=self.request.user)

    @extend_schema(tags=["Review Endpoints"], summary="List my reviews")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class FeaturedReviewsView(APIView):
    throttle_scope = "reviews"

    @extend_schema(tags=["Review Endpoints"], summary="Featured reviews", responses=ReviewSerializer(many=True))
    def get(self, request):
        return Response(ReviewSerializer(selectors.list_featured_reviews(), many=True).data)


class ProductReviewStatsView(APIView):
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Review Endpoints"], summary="Rating statistics for a product", responses=ReviewStatsSerializer
    )
    def get(self, request, product_id: int):
        return Response(selectors.get_product_review_stats(product_id=product_id))


class MyProductReviewView(APIView):
    """The caller's review of a product and whether they may review it."""

    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Review Endpoints"],
        summary="My review for a product",
        responses=inline_serializer(
            name="MyProductReview",
            fields={"review": ReviewSerializer(allow_null=True), "can_review": rf_serializers.BooleanField()},
        ),
    )
    def get(self, request, product_id: int):
        review = selectors.get_user_product_review(user=request.user, product_id=product_id)
        return Response(
            {
                "review": ReviewSerializer(review).data if review else None,
                "can_review": selectors.can_review_product(user=request.user, product_id=product_id),
            }
        )


class FeatureReviewView(APIView):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Feature or unfeature a review",
        request=FeatureReviewSerializer,
        responses=ReviewSerializer,
    )
    def post(self, request, review_id: int):
        serializer = FeatureReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = set_featured(review_id=review_id, is_featured=serializer.validated_data["is_featured"])
        return Response(ReviewSerializer(review).data)
