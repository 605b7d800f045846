"""Serializers for the public catalog API."""

from common.money import round_rating
from rest_framework import serializers

from .models import Banner, Category, Product


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "icon_url"]


class CategoryRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug"]


class ProductListSerializer(serializers.ModelSerializer):
    category = CategoryRefSerializer(read_only=True)
    in_stock = serializers.BooleanField(read_only=True)
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "price",
            "image_url",
            "inventory",
            "in_stock",
            "category",
            "average_rating",
            "review_count",
            "created_at",
        ]

    def get_average_rating(self, obj) -> float:
        # unrated products report 0
        return round_rating(getattr(obj, "average_rating", None)) or 0.0

    def get_review_count(self, obj) -> int:
        return int(getattr(obj, "review_count", 0) or 0)


class ProductDetailSerializer(ProductListSerializer):
    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + ["description", "metadata"]


class ProductSearchResultSerializer(ProductDetailSerializer):
    relevance_score = serializers.IntegerField(read_only=True)

    class Meta(ProductDetailSerializer.Meta):
        fields = ProductDetailSerializer.Meta.fields + ["relevance_score"]


class BannerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Banner
        fields = ["id", "title", "subtitle", "image_url", "link_url", "is_active", "sort_order"]
