"""Staff-facing serializers for catalog write endpoints."""

from rest_framework import serializers

from .models import Banner, Category, Product


class CategoryAdminSerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(required=False, allow_blank=True)

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "icon_url", "is_active", "sort_order"]


class ProductAdminSerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(required=False, allow_blank=True)
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), allow_null=True, required=False)
    inventory = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "inventory",
            "category",
            "image_url",
            "metadata",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate_metadata(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("metadata must be an object.")
        return value


class BannerAdminSerializer(serializers.ModelSerializer):
    class Meta:
        model = Banner
        fields = ["id", "title", "subtitle", "image_url", "link_url", "is_active", "sort_order", "created_at"]
        read_only_fields = ["id", "created_at"]


class BannerReorderSerializer(serializers.Serializer):
    banner_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
