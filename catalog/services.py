"""Catalog write helpers used by the staff endpoints."""

from common.exceptions import NotFoundError, ValidationError
from django.db import transaction

from .models import Banner


@transaction.atomic
def toggle_banner(*, banner_id) -> Banner:
    try:
        banner = Banner.objects.select_for_update().get(id=banner_id)
    except Banner.DoesNotExist:
        raise NotFoundError("Banner not found") from None
    banner.is_active = not banner.is_active
    banner.save(update_fields=["is_active", "updated_at"])
    return banner


@transaction.atomic
def reorder_banners(*, banner_ids: list[int]) -> list[Banner]:
    """Assign ``sort_order`` 0..n-1 following the given id order."""

    if len(set(banner_ids)) != len(banner_ids):
        raise ValidationError("Banner ids must be unique")
    banners = {b.id: b for b in Banner.objects.select_for_update().filter(id__in=banner_ids)}
    missing = [bid for bid in banner_ids if bid not in banners]
    if missing:
        raise NotFoundError(f"Unknown banner ids: {missing}")
    ordered = []
    for position, bid in enumerate(banner_ids):
        banner = banners[bid]
        banner.sort_order = position
        ordered.append(banner)
    Banner.objects.bulk_update(ordered, ["sort_order"])
    return ordered
