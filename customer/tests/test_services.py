from decimal import Decimal

import pytest
from common.exceptions import AddressNotFoundError
from customer.models import Address
from customer.selectors import get_default_address, list_addresses
from customer.services import (
    create_address,
    delete_address,
    set_default_address,
    snapshot_address,
    update_address,
)
from customer.tests.factories import AddressFactory
from django.db import IntegrityError, transaction
from users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db

FIELDS = {
    "label": "Work",
    "address_line1": "1 Residency Rd",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560025",
}


def test_first_address_becomes_default():
    user = UserFactory()
    address = create_address(user=user, **FIELDS)
    assert address.is_default is True


def test_new_default_demotes_previous():
    user = UserFactory()
    first = create_address(user=user, **FIELDS)
    second = create_address(user=user, is_default=True, **{**FIELDS, "label": "Other"})
    first.refresh_from_db()
    assert first.is_default is False
    assert second.is_default is True
    assert get_default_address(user=user) == second


def test_update_to_default_demotes_sibling():
    user = UserFactory()
    first = create_address(user=user, **FIELDS)
    second = create_address(user=user, **FIELDS)
    update_address(user=user, address=second, is_default=True)
    assert list(Address.objects.filter(user=user, is_default=True)) == [second]
    first.refresh_from_db()
    assert first.is_default is False


def test_db_rejects_two_defaults_for_one_user():
    user = UserFactory()
    AddressFactory(user=user, is_default=True)
    with pytest.raises(IntegrityError), transaction.atomic():
        AddressFactory(user=user, is_default=True)


def test_set_default_rejects_foreign_address():
    owner = UserFactory()
    other = UserFactory()
    address = AddressFactory(user=owner)
    with pytest.raises(AddressNotFoundError):
        set_default_address(user=other, address_id=address.id)


def test_list_orders_default_first():
    user = UserFactory()
    a = AddressFactory(user=user)
    b = AddressFactory(user=user, is_default=True)
    c = AddressFactory(user=user)
    assert list(list_addresses(user=user)) == [b, c, a]


def test_deleting_default_promotes_newest_remaining():
    user = UserFactory()
    older = AddressFactory(user=user)
    newer = AddressFactory(user=user)
    default = AddressFactory(user=user, is_default=True)
    delete_address(user=user, address_id=default.id)
    newer.refresh_from_db()
    older.refresh_from_db()
    assert newer.is_default is True
    assert older.is_default is False


def test_snapshot_is_plain_copy():
    address = AddressFactory(latitude=Decimal("12.971600"), longitude=Decimal("77.594600"))
    snap = snapshot_address(address)
    assert snap["address_line1"] == address.address_line1
    assert snap["zip_code"] == "560001"
    assert snap["geolocation"] == {"lat": 12.9716, "lng": 77.5946}
    address.city = "Mysuru"
    address.save()
    assert snap["city"] == "Bengaluru"
