from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "user", "rating", "is_featured", "created_at")
    list_filter = ("rating", "is_featured")
    list_editable = ("is_featured",)
    search_fields = ("product__name", "user__email", "review")
    raw_id_fields = ("user", "product")
