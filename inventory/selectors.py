"""Read-only inventory queries."""

from catalog.models import Product
from django.db.models import QuerySet

from .models import StockMovement


def list_movements(*, product_id=None, reason=None, reference=None, created_after=None) -> QuerySet[StockMovement]:
    qs = StockMovement.objects.select_related("product").order_by("-created_at", "-id")
    if product_id:
        qs = qs.filter(product_id=product_id)
    if reason:
        qs = qs.filter(reason=reason)
    if reference:
        qs = qs.filter(reference=reference)
    if created_after:
        qs = qs.filter(created_at__gte=created_after)
    return qs


def list_low_stock(*, threshold: int = 5) -> QuerySet[Product]:
    """Active products at or below ``threshold`` units, scarcest first."""

    return Product.objects.filter(is_active=True, inventory__lte=threshold).order_by("inventory", "name")
