"""Account workflows that touch email delivery."""

from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode


def build_frontend_url(path: str, query: dict | None = None) -> str:
    """Join ``FRONTEND_URL`` with ``path`` and an optional query string."""
    base = (getattr(settings, "FRONTEND_URL", "") or "").rstrip("/")
    url = f"{base}{path}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def send_password_reset_email(user):
    """Mail a reset link carrying uid/token; returns both for the caller's logs."""
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    token = default_token_generator.make_token(user)
    link = build_frontend_url(settings.PASSWORD_RESET_PATH, {"uid": uid, "token": token})
    send_mail(
        subject="Reset your FreshCart password",
        message=f"Use this link to reset your password: {link}",
        from_email=None,
        recipient_list=[user.email],
    )
    return uid, token
