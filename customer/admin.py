from django.contrib import admin

from .models import Address, Profile


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "label", "city", "state", "zip_code", "is_default")
    list_filter = ("is_default", "state", "country")
    search_fields = ("label", "address_line1", "city", "zip_code", "user__email", "user__username")
    ordering = ("-updated_at", "id")
    raw_id_fields = ("user",)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "full_name", "email_opt_in", "sms_opt_in")
    search_fields = ("full_name", "user__email", "user__username")
    ordering = ("-updated_at", "id")
