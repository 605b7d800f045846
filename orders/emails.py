"""Outbound order messages, sent only after the order transaction commits.

Uses Django's email backend, with links composed from FRONTEND_URL. Each
channel respects the customer's profile opt-ins.
"""

import logging

from customer.selectors import get_profile
from django.conf import settings
from django.db import DatabaseError
from notifications import channels

logger = logging.getLogger("freshcart.orders")


def order_url(order) -> str:
    frontend = getattr(settings, "FRONTEND_URL", "")
    if not frontend:
        return ""
    return f"{frontend.rstrip('/')}/orders/{order.id}"


def send_order_update(order, *, title: str, message: str) -> dict:
    """Email and text the order's owner about ``order``.

    Returns which channels accepted the message.
    """

    user = order.user
    try:
        profile = get_profile(user=user)
    except DatabaseError:
        logger.exception("order.fan_out_failed", extra={"event": "order.fan_out_failed", "order_id": order.id})
        return {"email_sent": False, "sms_sent": False}
    link = order_url(order)
    body = f"{message}\n\nOrder: {order.number}\nStatus: {order.status}\n"
    if link:
        body += f"\nYou can view your order here: {link}\n"

    email_sent = sms_sent = False
    if profile.email_opt_in:
        email_sent = channels.send_email(to=user.email, subject=f"{title} ({order.number})", body=body)
    if profile.sms_opt_in:
        sms_sent = channels.send_sms(to=user.phone, body=f"{order.number}: {message}")
    logger.info(
        "order.fan_out",
        extra={"event": "order.fan_out", "order_id": order.id, "email_sent": email_sent, "sms_sent": sms_sent},
    )
    return {"email_sent": email_sent, "sms_sent": sms_sent}
