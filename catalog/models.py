"""Catalog app models.

Categories group products; products carry the sell price and the on-hand
inventory the order transition decrements. Banners feed the storefront's
hero carousel.
"""

from common.models import TimeStampedModel
from django.db import models
from django.utils.text import slugify


def unique_slug(model, value: str, *, instance_id=None, max_length: int = 220) -> str:
    """Slugify ``value`` and suffix ``-2``, ``-3``... until no other row uses it."""

    base = (slugify(value) or "item")[: max_length - 6]
    candidate, n = base, 2
    qs = model.objects.exclude(pk=instance_id) if instance_id else model.objects.all()
    while qs.filter(slug=candidate).exists():
        candidate = f"{base}-{n}"
        n += 1
    return candidate


class Category(TimeStampedModel):
    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=140, unique=True)
    description = models.TextField(blank=True)
    icon_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Category, self.name, instance_id=self.pk, max_length=140)
        super().save(*args, **kwargs)


class Product(TimeStampedModel):
    """Sellable item.

    ``inventory`` is the on-hand count; the database refuses negative values
    so a racing decrement can never oversell.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    inventory = models.IntegerField(default=0)
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        related_name="products",
        on_delete=models.SET_NULL,
    )
    image_url = models.URLField(blank=True)
    metadata = models.JSONField(default=dict, blank=True, help_text="Free-form attributes (unit, origin, ...)")
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(name="product_inventory_non_negative", check=models.Q(inventory__gte=0)),
            models.CheckConstraint(name="product_price_non_negative", check=models.Q(price__gte=0)),
        ]
        indexes = [
            models.Index(fields=["is_active", "category"], name="product_active_category_idx"),
            models.Index(fields=["is_active", "-created_at"], name="product_active_created_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Product, self.name, instance_id=self.pk)
        super().save(*args, **kwargs)

    @property
    def in_stock(self) -> bool:
        return self.inventory > 0


class Banner(TimeStampedModel):
    """Promotional hero banner shown on the storefront home page."""

    title = models.CharField(max_length=200)
    subtitle = models.CharField(max_length=300, blank=True)
    image_url = models.URLField()
    link_url = models.CharField(max_length=500, blank=True, help_text="Absolute URL or in-app path")
    is_active = models.BooleanField(default=True, db_index=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:  # pragma: no cover
        return self.title
