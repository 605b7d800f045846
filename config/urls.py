"""Root URL configuration.

REST resources are versioned under ``api/v1/``; the serverless-style JSON
endpoints consumed by the storefront client live under ``functions/v1/``.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .health import health

admin.site.site_header = "FreshCart Admin"
admin.site.index_title = "Admin"

urlpatterns = [
    path("admin/", admin.site.urls),
    # API schema and Swagger UI
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="api-schema"), name="api-docs"),
    # Healthcheck
    path("health/", health, name="health"),
    # Versioned v1 routes only
    path("api/v1/", include("users.urls")),
    path("api/v1/catalog/", include("catalog.urls")),
    path("api/v1/admin/catalog/", include("catalog.admin_urls")),
    path("api/v1/reviews/", include("reviews.urls")),
    path("api/v1/inventory/", include("inventory.urls")),
    path("api/v1/customer/", include("customer.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/orders/", include("orders.urls")),
    path("api/v1/notifications/", include("notifications.urls")),
    path("api/v1/wishlist/", include("wishlist.urls")),
    path("functions/v1/", include("functions.urls")),
]
