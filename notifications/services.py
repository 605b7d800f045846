"""Notification services: append, fan out, and manage a user's notifications."""

import logging

from common.choices import NotificationType
from common.exceptions import NotFoundError, ValidationError
from django.db import transaction

from . import channels
from .models import Notification

logger = logging.getLogger("freshcart.notifications")


def notify(
    *,
    user,
    type: str,
    title: str,
    message: str,
    metadata: dict | None = None,
    send_email: bool = False,
    send_sms: bool = False,
) -> dict:
    """Append a notification for ``user`` and optionally fan it out.

    The row is always written. Email goes to ``user.email`` and SMS to
    ``user.phone``; their outcome is reported in the result but a failed
    delivery never raises.
    """

    if type not in NotificationType.values:
        raise ValidationError(f"Unknown notification type: {type}")
    if not title or not message:
        raise ValidationError("Title and message are required")

    notification = Notification.objects.create(
        user=user, type=type, title=title, message=message, metadata=metadata or {}
    )
    email_sent = channels.send_email(to=user.email, subject=title, body=message) if send_email else False
    sms_sent = channels.send_sms(to=getattr(user, "phone", ""), body=f"{title}: {message}") if send_sms else False
    logger.info(
        "notification.created",
        extra={
            "event": "notification.created",
            "notification_id": notification.id,
            "user_id": user.id,
            "type": type,
            "email_sent": email_sent,
            "sms_sent": sms_sent,
        },
    )
    return {"notification": notification, "email_sent": email_sent, "sms_sent": sms_sent}


def _get_own(*, user, notification_id) -> Notification:
    try:
        return Notification.objects.get(id=notification_id, user=user)
    except (Notification.DoesNotExist, ValueError):
        raise NotFoundError("Notification not found") from None


def mark_as_read(*, user, notification_id) -> Notification:
    notification = _get_own(user=user, notification_id=notification_id)
    if not notification.read:
        notification.read = True
        notification.save(update_fields=["read", "updated_at"])
    return notification


@transaction.atomic
def mark_all_as_read(*, user) -> int:
    return Notification.objects.filter(user=user, read=False).update(read=True)


def delete_notification(*, user, notification_id) -> None:
    _get_own(user=user, notification_id=notification_id).delete()
