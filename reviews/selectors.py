"""Read-only review queries."""

from common.choices import OrderStatus
from common.money import round_rating
from django.db.models import Avg, Count, QuerySet

from .models import Review


def list_reviews(*, product_id=None, rating=None) -> QuerySet[Review]:
    qs = Review.objects.select_related("user", "product").filter(product__is_active=True)
    if product_id is not None:
        qs = qs.filter(product_id=product_id)
    if rating is not None:
        qs = qs.filter(rating=rating)
    return qs.order_by("-created_at", "-id")


def list_user_reviews(*, user) -> QuerySet[Review]:
    return Review.objects.filter(user=user).select_related("product").order_by("-created_at", "-id")


def list_featured_reviews(*, limit: int = 6) -> QuerySet[Review]:
    return list_reviews().filter(is_featured=True)[:limit]


def get_user_product_review(*, user, product_id) -> Review | None:
    return Review.objects.filter(user=user, product_id=product_id).first()


def get_product_review_stats(*, product_id) -> dict:
    """Totals for a product: count, average (one decimal) and a 1..5 histogram."""

    qs = Review.objects.filter(product_id=product_id)
    agg = qs.aggregate(total=Count("id"), average=Avg("rating"))
    counts = {str(star): 0 for star in range(1, 6)}
    for row in qs.order_by().values("rating").annotate(n=Count("id")):
        counts[str(row["rating"])] = row["n"]
    return {
        "total_reviews": agg["total"] or 0,
        "average_rating": round_rating(agg["average"]) or 0.0,
        "rating_counts": counts,
    }


def can_review_product(*, user, product_id) -> bool:
    """True when the user received a delivered order containing the product."""

    from orders.models import OrderItem

    return OrderItem.objects.filter(
        order__user=user,
        order__status=OrderStatus.DELIVERED,
        product_id=product_id,
    ).exists()
