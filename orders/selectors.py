from common.exceptions import NotFoundError
from django.db.models import Count, QuerySet

from .models import Order


def list_orders(*, user, status: str | None = None) -> QuerySet[Order]:
    qs = Order.objects.filter(user=user).annotate(item_count=Count("items"))
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")


def get_order(*, order_id, user=None) -> Order:
    """Return one order with its lines; restricted to ``user`` when given."""

    qs = Order.objects.select_related("user").prefetch_related("items")
    if user is not None:
        qs = qs.filter(user=user)
    try:
        return qs.get(id=order_id)
    except (Order.DoesNotExist, ValueError):
        raise NotFoundError("Order not found") from None
