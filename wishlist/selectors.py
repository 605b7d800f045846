from django.db.models import QuerySet

from .models import WishlistItem


def list_wishlist(*, user) -> QuerySet[WishlistItem]:
    return WishlistItem.objects.filter(user=user).select_related("product", "product__category")


def is_in_wishlist(*, user, product_id) -> bool:
    return WishlistItem.objects.filter(user=user, product_id=product_id).exists()


def wishlist_count(*, user) -> int:
    return WishlistItem.objects.filter(user=user).count()
