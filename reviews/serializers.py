from rest_framework import serializers

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "product", "product_name", "user_name", "rating", "review", "is_featured", "created_at"]
        read_only_fields = fields

    def get_user_name(self, obj) -> str:
        profile = getattr(obj.user, "profile", None)
        full_name = getattr(profile, "full_name", "") if profile is not None else ""
        return full_name or obj.user.get_full_name() or obj.user.username


class ReviewCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    review = serializers.CharField(required=False, allow_blank=True, default="")


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    review = serializers.CharField(required=False, allow_blank=True)


class ReviewStatsSerializer(serializers.Serializer):
    total_reviews = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_counts = serializers.DictField(child=serializers.IntegerField())


class FeatureReviewSerializer(serializers.Serializer):
    is_featured = serializers.BooleanField(default=True)
