"""Selectors for the catalog domain.

Read-only query helpers shared by the REST views, the search function
endpoint and the order transition. Selectors return querysets or plain
lists and never write.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from common.choices import OrderStatus
from common.exceptions import NotFoundError, ValidationError
from django.conf import settings
from django.db.models import (
    Avg,
    Case,
    Count,
    F,
    IntegerField,
    OuterRef,
    Q,
    QuerySet,
    Subquery,
    Sum,
    Value,
    When,
)
from django.db.models.functions import Coalesce
from django.utils import timezone

from .models import Banner, Category, Product

SORT_FIELDS = {
    "name": "name",
    "price": "price",
    "created_at": "created_at",
    "rating": "average_rating",
}
MAX_SEARCH_LIMIT = 50


def list_categories() -> QuerySet[Category]:
    """Active categories ordered by name."""

    return Category.objects.filter(is_active=True).order_by("name")


def get_category(*, slug: str | None = None, category_id=None) -> Category:
    lookup = {"slug": slug} if slug is not None else {"id": category_id}
    try:
        return Category.objects.get(is_active=True, **lookup)
    except (Category.DoesNotExist, ValueError):
        raise NotFoundError("Category not found") from None


def with_ratings(qs: QuerySet[Product]) -> QuerySet[Product]:
    """Annotate ``average_rating`` and ``review_count`` from reviews.

    Correlated subqueries keep the annotation independent of any other joins
    on the queryset (e.g. order lines for trending).
    """

    from reviews.models import Review

    reviews = Review.objects.filter(product=OuterRef("pk")).order_by().values("product")
    return qs.annotate(
        average_rating=Subquery(reviews.annotate(avg=Avg("rating")).values("avg")[:1]),
        review_count=Coalesce(
            Subquery(reviews.annotate(n=Count("id")).values("n")[:1], output_field=IntegerField()),
            Value(0),
        ),
    )


def active_products() -> QuerySet[Product]:
    return Product.objects.filter(is_active=True).select_related("category")


def list_products(
    *,
    category_id=None,
    category_slug: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> QuerySet[Product]:
    """Return active products with optional filters, rated and sorted.

    ``sort_by`` is one of name, price, created_at or rating; unrated
    products sort last when ordering by rating.
    """

    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"sort_by must be one of: {', '.join(SORT_FIELDS)}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sort_order must be 'asc' or 'desc'")

    qs = with_ratings(active_products())
    if category_id is not None:
        qs = qs.filter(category_id=category_id)
    if category_slug:
        qs = qs.filter(category__slug=category_slug)
    if min_price is not None:
        qs = qs.filter(price__gte=min_price)
    if max_price is not None:
        qs = qs.filter(price__lte=max_price)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))

    field = F(SORT_FIELDS[sort_by])
    primary = field.asc(nulls_last=True) if sort_order == "asc" else field.desc(nulls_last=True)
    return qs.order_by(primary, "-id")


def get_product(*, product_id=None, slug: str | None = None) -> Product:
    """Return one active product by id or slug, with ratings."""

    lookup = {"slug": slug} if slug is not None else {"id": product_id}
    try:
        return with_ratings(active_products()).get(**lookup)
    except (Product.DoesNotExist, ValueError):
        raise NotFoundError("Product not found") from None


def get_similar_products(*, product: Product, limit: int | None = None) -> QuerySet[Product]:
    """Active products in the same category, excluding ``product``, newest first."""

    limit = limit or settings.SIMILAR_PRODUCTS_LIMIT
    if product.category_id is None:
        return Product.objects.none()
    qs = active_products().filter(category_id=product.category_id).exclude(id=product.id)
    return with_ratings(qs).order_by("-created_at", "-id")[:limit]


def get_search_suggestions(*, query: str, limit: int | None = None) -> list[str]:
    """Names of active products containing ``query`` (case-insensitive)."""

    query = (query or "").strip()
    if not query:
        return []
    limit = limit or settings.SEARCH_SUGGESTIONS_LIMIT
    qs = Product.objects.filter(is_active=True, name__icontains=query).order_by("name")
    return list(qs.values_list("name", flat=True).distinct()[:limit])


def get_featured_products(*, limit: int | None = None) -> QuerySet[Product]:
    limit = limit or settings.FEATURED_PRODUCTS_LIMIT
    return with_ratings(active_products()).order_by("-created_at", "-id")[:limit]


def get_trending_products(*, limit: int | None = None, days: int | None = None) -> QuerySet[Product]:
    """Active products ranked by units ordered recently.

    Cancelled orders do not count; products never ordered in the window are
    left out.
    """

    limit = limit or settings.FEATURED_PRODUCTS_LIMIT
    since = timezone.now() - timedelta(days=days or settings.TRENDING_WINDOW_DAYS)
    recent = Q(order_items__order__created_at__gte=since) & ~Q(order_items__order__status=OrderStatus.CANCELLED)
    qs = active_products().annotate(units_ordered=Sum("order_items__quantity", filter=recent))
    qs = qs.filter(units_ordered__gt=0)
    return with_ratings(qs).order_by("-units_ordered", "-created_at")[:limit]


def search_products(
    *,
    query: str = "",
    limit: int = 10,
    offset: int = 0,
    category_id=None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
) -> list[Product]:
    """Relevance-ranked product search.

    Score: +10 name contains the query, +5 name starts with it, +3
    description contains it. All matches are ranked before ``offset`` and
    ``limit`` are applied. Without a query every active product matches with
    score 0 and results are newest first.
    """

    limit = max(1, min(int(limit or 10), MAX_SEARCH_LIMIT))
    offset = max(0, int(offset or 0))
    query = (query or "").strip()
    qs = with_ratings(active_products())
    if category_id is not None:
        qs = qs.filter(category_id=category_id)
    if min_price is not None:
        qs = qs.filter(price__gte=min_price)
    if max_price is not None:
        qs = qs.filter(price__lte=max_price)

    if not query:
        qs = qs.annotate(relevance_score=Value(0, output_field=IntegerField()))
        return list(qs.order_by("-created_at", "-id")[offset : offset + limit])

    qs = qs.filter(Q(name__icontains=query) | Q(description__icontains=query))
    score = (
        Case(When(name__icontains=query, then=Value(10)), default=Value(0), output_field=IntegerField())
        + Case(When(name__istartswith=query, then=Value(5)), default=Value(0), output_field=IntegerField())
        + Case(When(description__icontains=query, then=Value(3)), default=Value(0), output_field=IntegerField())
    )
    qs = qs.annotate(relevance_score=score).order_by("-relevance_score", "-created_at", "-id")
    return list(qs[offset : offset + limit])


def list_active_banners() -> QuerySet[Banner]:
    return Banner.objects.filter(is_active=True).order_by("sort_order", "id")
