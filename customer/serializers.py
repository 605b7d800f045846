"""Serializers for profiles and delivery addresses."""

from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from .models import Address, Profile
from .services import create_address, update_address


class GeolocationSerializer(serializers.Serializer):
    lat = serializers.DecimalField(
        max_digits=9, decimal_places=6, min_value=-90, max_value=90, coerce_to_string=False
    )
    lng = serializers.DecimalField(
        max_digits=9, decimal_places=6, min_value=-180, max_value=180, coerce_to_string=False
    )


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Home address",
            value={
                "id": 3,
                "label": "Home",
                "address_line1": "12 MG Road",
                "address_line2": "Flat 4B",
                "city": "Bengaluru",
                "state": "Karnataka",
                "zip_code": "560001",
                "country": "India",
                "geolocation": {"lat": 12.9716, "lng": 77.5946},
                "is_default": True,
            },
            response_only=True,
        )
    ]
)
class AddressSerializer(serializers.ModelSerializer):
    """Address with ``geolocation`` exposed as a ``{lat, lng}`` object."""

    geolocation = GeolocationSerializer(required=False, allow_null=True)

    class Meta:
        model = Address
        fields = (
            "id",
            "label",
            "address_line1",
            "address_line2",
            "city",
            "state",
            "zip_code",
            "country",
            "geolocation",
            "is_default",
            "created_at",
        )
        read_only_fields = ("id", "created_at")

    def _unpack_geolocation(self, validated_data):
        if "geolocation" not in validated_data:
            return validated_data
        geo = validated_data.pop("geolocation")
        validated_data["latitude"] = geo["lat"] if geo else None
        validated_data["longitude"] = geo["lng"] if geo else None
        return validated_data

    def create(self, validated_data):
        user = self.context["request"].user
        return create_address(user=user, **self._unpack_geolocation(validated_data))

    def update(self, instance, validated_data):
        user = self.context["request"].user
        return update_address(user=user, address=instance, **self._unpack_geolocation(validated_data))


class ProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)
    phone = serializers.CharField(source="user.phone", read_only=True)

    class Meta:
        model = Profile
        fields = ("id", "full_name", "avatar_url", "bio", "email", "phone", "email_opt_in", "sms_opt_in")
        read_only_fields = ("id", "email", "phone")
