import logging

logger = logging.getLogger("freshcart.auth")


def client_ip(request) -> str | None:
    """First hop of X-Forwarded-For when behind the proxy, else REMOTE_ADDR."""

    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR")


def log_auth_event(action: str, request, user=None, status: str = "success", extra: dict | None = None):
    event = f"auth.{action}"
    context = {"event": event, "action": action, "status": status, "ip": client_ip(request)}
    if user is not None:
        context["user_id"] = user.id
    context.update(extra or {})
    level = logging.INFO if status in ("success", "sent") else logging.WARNING
    logger.log(level, event, extra=context)
