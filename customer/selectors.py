"""Read-only data access helpers for the customer app."""

from common.exceptions import AddressNotFoundError
from django.db.models import QuerySet

from .models import Address, Profile


def get_profile(*, user) -> Profile:
    """Return the user's profile, creating an empty one on first access."""

    profile, _ = Profile.objects.get_or_create(user=user)
    return profile


def list_addresses(*, user) -> QuerySet[Address]:
    """Default address first, then newest."""

    return Address.objects.filter(user=user).order_by("-is_default", "-created_at", "-id")


def get_address_for_user(*, user, address_id) -> Address:
    """Return the address only when ``user`` owns it."""

    try:
        return Address.objects.get(id=address_id, user=user)
    except (Address.DoesNotExist, ValueError, TypeError):
        raise AddressNotFoundError() from None


def get_default_address(*, user) -> Address | None:
    return Address.objects.filter(user=user, is_default=True).first()
