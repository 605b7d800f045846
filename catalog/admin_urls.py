"""Admin router for catalog write endpoints."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .admin_views import BannerAdminViewSet, CategoryAdminViewSet, ProductAdminViewSet

router = SimpleRouter()
router.register(r"categories", CategoryAdminViewSet, basename="admin-category")
router.register(r"products", ProductAdminViewSet, basename="admin-product")
router.register(r"banners", BannerAdminViewSet, basename="admin-banner")

urlpatterns = [path("", include(router.urls))]
