"""Outbound delivery channels for notifications.

Both channels return whether a message was handed off. Neither raises for
delivery problems; callers treat the result as advisory.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger("freshcart.notifications")


def send_email(*, to: str, subject: str, body: str) -> bool:
    if not to:
        return False
    try:
        sent = send_mail(subject, body, getattr(settings, "DEFAULT_FROM_EMAIL", None), [to], fail_silently=False)
    except Exception:
        logger.exception("notification.email_failed", extra={"event": "notification.email_failed", "to": to})
        return False
    return bool(sent)


def send_sms(*, to: str, body: str) -> bool:
    """Log the message in place of an SMS gateway."""

    if not to or not settings.SMS_ENABLED:
        return False
    logger.info("notification.sms_sent", extra={"event": "notification.sms_sent", "to": to, "length": len(body)})
    return True
