from django.db.models import QuerySet

from .models import Notification


def list_notifications(*, user, type: str | None = None, read: bool | None = None) -> QuerySet[Notification]:
    qs = Notification.objects.filter(user=user)
    if type:
        qs = qs.filter(type=type)
    if read is not None:
        qs = qs.filter(read=read)
    return qs.order_by("-created_at", "-id")


def unread_count(*, user) -> int:
    return Notification.objects.filter(user=user, read=False).count()
