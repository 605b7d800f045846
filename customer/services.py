"""Address mutations and snapshotting.

Keep business rules here and keep views thin.
"""

from django.db import transaction

from .models import Address
from .selectors import get_address_for_user

_SNAPSHOT_FIELDS = (
    "label",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "zip_code",
    "country",
)


def _clear_other_defaults(*, user, keep_id=None) -> None:
    Address.objects.filter(user=user, is_default=True).exclude(id=keep_id).update(is_default=False)


@transaction.atomic
def create_address(*, user, **fields) -> Address:
    """Create an address; a default address demotes the previous default.

    A user's first address becomes the default automatically.
    """

    is_default = bool(fields.pop("is_default", False)) or not Address.objects.filter(user=user).exists()
    if is_default:
        _clear_other_defaults(user=user)
    return Address.objects.create(user=user, is_default=is_default, **fields)


@transaction.atomic
def update_address(*, user, address: Address, **fields) -> Address:
    if address.user_id != user.id:
        address = get_address_for_user(user=user, address_id=address.id)
    if fields.get("is_default"):
        _clear_other_defaults(user=user, keep_id=address.id)
    for name, value in fields.items():
        setattr(address, name, value)
    address.save()
    return address


@transaction.atomic
def set_default_address(*, user, address_id) -> Address:
    address = get_address_for_user(user=user, address_id=address_id)
    _clear_other_defaults(user=user, keep_id=address.id)
    if not address.is_default:
        address.is_default = True
        address.save(update_fields=["is_default", "updated_at"])
    return address


@transaction.atomic
def delete_address(*, user, address_id) -> None:
    """Delete an address; promote the newest remaining one if it was the default.

    Orders keep their own address snapshot, so deletion never touches them.
    """

    address = get_address_for_user(user=user, address_id=address_id)
    was_default = address.is_default
    address.delete()
    if was_default:
        successor = Address.objects.filter(user=user).order_by("-created_at", "-id").first()
        if successor is not None:
            successor.is_default = True
            successor.save(update_fields=["is_default", "updated_at"])


def snapshot_address(address: Address) -> dict:
    """Return a frozen JSON-safe copy of ``address`` for embedding in an order."""

    data = {name: getattr(address, name) for name in _SNAPSHOT_FIELDS}
    data["id"] = address.id
    data["geolocation"] = address.geolocation
    return data
