"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import (
    OrderCancelView,
    OrderDetailView,
    OrderListCreateView,
    OrderReorderView,
    OrderStatsView,
    OrderStatusUpdateView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="order-list"),
    path("stats/", OrderStatsView.as_view(), name="order-stats"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/cancel/", OrderCancelView.as_view(), name="order-cancel"),
    path("<int:order_id>/reorder/", OrderReorderView.as_view(), name="order-reorder"),
    path("<int:order_id>/status/", OrderStatusUpdateView.as_view(), name="order-status"),
]
