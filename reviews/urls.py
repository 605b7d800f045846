from django.urls import path

from .views import (
    FeaturedReviewsView,
    FeatureReviewView,
    MyProductReviewView,
    MyReviewsView,
    ProductReviewStatsView,
    ReviewDetailView,
    ReviewListCreateView,
)

app_name = "reviews"

urlpatterns = [
    path("", ReviewListCreateView.as_view(), name="review-list"),
    path("mine/", MyReviewsView.as_view(), name="review-mine"),
    path("featured/", FeaturedReviewsView.as_view(), name="review-featured"),
    path("<int:review_id>/", ReviewDetailView.as_view(), name="review-detail"),
    path("<int:review_id>/feature/", FeatureReviewView.as_view(), name="review-feature"),
    path("products/<int:product_id>/stats/", ProductReviewStatsView.as_view(), name="review-product-stats"),
    path("products/<int:product_id>/mine/", MyProductReviewView.as_view(), name="review-product-mine"),
]
