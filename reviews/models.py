"""Product reviews (testimonials) left by shoppers."""

from common.models import TimeStampedModel
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(TimeStampedModel):
    """One rating per (user, product); staff may feature it on the storefront."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="reviews", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="reviews", on_delete=models.CASCADE)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    review = models.TextField(blank=True)
    is_featured = models.BooleanField(default=False, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="one_review_per_user_product"),
            models.CheckConstraint(name="review_rating_1_to_5", check=models.Q(rating__gte=1, rating__lte=5)),
        ]
        indexes = [
            models.Index(fields=["product", "-created_at"], name="review_product_created_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Review#{self.id} product={self.product_id} rating={self.rating}"
