from common.choices import NotificationType
from common.models import TimeStampedModel
from django.conf import settings
from django.db import models


class Notification(TimeStampedModel):
    """In-app message for one user. Rows are appended, marked read, or deleted."""

    TYPE_CHOICES = NotificationType.choices

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="notifications", on_delete=models.CASCADE)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=NotificationType.SYSTEM)
    title = models.CharField(max_length=200)
    message = models.TextField()
    read = models.BooleanField(default=False)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "read"], name="notification_user_read_idx"),
            models.Index(fields=["user", "-created_at"], name="notification_user_created_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Notification#{self.id} {self.type} user={self.user_id}"
