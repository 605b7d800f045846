from django.urls import path

from .views import LowStockView, MovementListCreateView

app_name = "inventory"

urlpatterns = [
    path("movements/", MovementListCreateView.as_view(), name="movement-list"),
    path("low-stock/", LowStockView.as_view(), name="low-stock"),
]
