"""Review mutations."""

import logging

from catalog.models import Product
from common.exceptions import NotFoundError, ValidationError
from django.db import IntegrityError, transaction

from .models import Review

logger = logging.getLogger("freshcart.reviews")


def _validate_rating(rating) -> int:
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be an integer between 1 and 5") from None
    if not 1 <= rating <= 5:
        raise ValidationError("Rating must be an integer between 1 and 5")
    return rating


def create_review(*, user, product_id, rating, review: str = "") -> Review:
    rating = _validate_rating(rating)
    if not Product.objects.filter(id=product_id, is_active=True).exists():
        raise NotFoundError("Product not found")
    try:
        with transaction.atomic():
            obj = Review.objects.create(user=user, product_id=product_id, rating=rating, review=review or "")
    except IntegrityError:
        raise ValidationError("You have already reviewed this product") from None
    logger.info(
        "review.created",
        extra={"event": "review.created", "user_id": user.id, "product_id": int(product_id), "rating": rating},
    )
    return obj


def update_review(*, user, review_id, rating=None, review: str | None = None) -> Review:
    obj = _own_review(user=user, review_id=review_id)
    fields = ["updated_at"]
    if rating is not None:
        obj.rating = _validate_rating(rating)
        fields.append("rating")
    if review is not None:
        obj.review = review
        fields.append("review")
    obj.save(update_fields=fields)
    return obj


def delete_review(*, user, review_id) -> None:
    _own_review(user=user, review_id=review_id).delete()


def set_featured(*, review_id, is_featured: bool) -> Review:
    try:
        obj = Review.objects.get(id=review_id)
    except Review.DoesNotExist:
        raise NotFoundError("Review not found") from None
    obj.is_featured = bool(is_featured)
    obj.save(update_fields=["is_featured", "updated_at"])
    return obj


def _own_review(*, user, review_id) -> Review:
    try:
        return Review.objects.get(id=review_id, user=user)
    except (Review.DoesNotExist, ValueError):
        raise NotFoundError("Review not found") from None
