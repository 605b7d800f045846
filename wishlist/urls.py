from django.urls import path

from .views import (
    WishlistClearView,
    WishlistContainsView,
    WishlistCountView,
    WishlistRemoveView,
    WishlistToggleView,
    WishlistView,
)

app_name = "wishlist"

urlpatterns = [
    path("", WishlistView.as_view(), name="wishlist"),
    path("toggle/", WishlistToggleView.as_view(), name="toggle"),
    path("count/", WishlistCountView.as_view(), name="count"),
    path("clear/", WishlistClearView.as_view(), name="clear"),
    path("<int:product_id>/", WishlistRemoveView.as_view(), name="remove"),
    path("<int:product_id>/contains/", WishlistContainsView.as_view(), name="contains"),
]
