"""Customer domain models.

A profile carrying display details and contact preferences, and the
delivery addresses a shopper can choose from at checkout.
"""

from common.models import TimeStampedModel
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models


class Address(TimeStampedModel):
    """Delivery address owned by a user.

    At most one address per user is flagged ``is_default``; the services
    module clears the flag on siblings whenever a new default is chosen.
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="addresses")
    label = models.CharField(max_length=50, default="Home", help_text="e.g. Home, Work")
    address_line1 = models.CharField(max_length=255)
    address_line2 = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(
        max_length=12,
        validators=[RegexValidator(r"^[A-Za-z0-9\- ]{3,12}$", message="Use a standard postal/zip code")],
    )
    country = models.CharField(max_length=100, default="India")
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        indexes = [
            models.Index(fields=["user", "is_default"], name="address_user_default_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="one_default_address_per_user",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.label}: {self.address_line1}, {self.city}"

    @property
    def geolocation(self) -> dict | None:
        if self.latitude is None or self.longitude is None:
            return None
        return {"lat": float(self.latitude), "lng": float(self.longitude)}


class Profile(TimeStampedModel):
    """Per-user display details and notification preferences.

    Auth identity (email, phone) stays on ``users.User``.
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    full_name = models.CharField(max_length=150, blank=True)
    avatar_url = models.URLField(blank=True)
    bio = models.TextField(blank=True)
    email_opt_in = models.BooleanField(default=True)
    sms_opt_in = models.BooleanField(default=True)

    def __str__(self) -> str:  # pragma: no cover
        return f"Profile<{self.user_id}>"
