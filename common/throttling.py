"""Scoped throttle that resolves its rate from settings at request time.

DRF caches ``THROTTLE_RATES`` on the class at import; reading settings per
request lets ``override_settings`` in tests change rates reliably.
"""

from django.conf import settings
from rest_framework.throttling import ScopedRateThrottle


class SettingsScopedRateThrottle(ScopedRateThrottle):
    def get_rate(self):
        rf = getattr(settings, "REST_FRAMEWORK", {})
        rates = rf.get("DEFAULT_THROTTLE_RATES", {})
        return rates.get(self.scope)

    def get_ident(self, request):
        # Authenticated callers are throttled per user, anonymous ones per IP.
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            return f"user:{user.pk}"
        return super().get_ident(request)
