import sentry_sdk
from decouple import Csv, config
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from .base import *  # noqa

DEBUG = False

SECRET_KEY = config("SECRET_KEY")
ALLOWED_HOSTS = config("ALLOWED_HOSTS", cast=Csv())

# Storefront clients are listed explicitly in production
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = config("CORS_ALLOWED_ORIGINS", default="", cast=Csv())
CORS_ALLOW_CREDENTIALS = config("CORS_ALLOW_CREDENTIALS", default=True, cast=bool)
CSRF_TRUSTED_ORIGINS = config("CSRF_TRUSTED_ORIGINS", default="", cast=Csv())

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
SECURE_HSTS_SECONDS = config("SECURE_HSTS_SECONDS", default=31536000, cast=int)
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
SESSION_COOKIE_SECURE = CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SAMESITE = config("SESSION_COOKIE_SAMESITE", default="Lax")
CSRF_COOKIE_SAMESITE = config("CSRF_COOKIE_SAMESITE", default="Lax")

EMAIL_BACKEND = config("EMAIL_BACKEND", default="django.core.mail.backends.smtp.EmailBackend")

_REDIS_URL = config("REDIS_URL", default="")
if _REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": _REDIS_URL,
            "KEY_PREFIX": "freshcart",
        }
    }
    SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"

# JSON lines on stdout. Order INFO events may be sampled, but placement,
# cancellation and status changes are always kept.
_KEEP_ORDER_EVENTS = ["order.created", "order.cancelled", "order_status_changed"]
_APP_LOGGERS = [
    "freshcart.auth",
    "freshcart.cart",
    "freshcart.errors",
    "freshcart.functions",
    "freshcart.inventory",
    "freshcart.notifications",
    "freshcart.reviews",
    "freshcart.wishlist",
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"json": {"()": "config.logging.JsonFormatter"}},
    "filters": {
        "sample_order_info": {
            "()": "config.logging.SamplingFilter",
            "rate": config("ORDERS_LOG_SAMPLE_RATE", default=1.0, cast=float),
            "levels": ["INFO"],
            "allow_events": _KEEP_ORDER_EVENTS,
        },
    },
    "handlers": {
        "json_console": {"class": "logging.StreamHandler", "formatter": "json"},
        "sampled_console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["sample_order_info"],
        },
    },
    "root": {"handlers": ["json_console"], "level": config("LOG_LEVEL", default="INFO")},
    "loggers": {
        **{name: {"handlers": ["json_console"], "level": "INFO", "propagate": False} for name in _APP_LOGGERS},
        "freshcart.orders": {"handlers": ["sampled_console"], "level": "INFO", "propagate": False},
    },
}

SENTRY_DSN = config("SENTRY_DSN", default="")
if SENTRY_DSN:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=config("SENTRY_ENV", default="production"),
        release=config("SENTRY_RELEASE", default=None),
        integrations=[DjangoIntegration(), LoggingIntegration(event_level=None)],
        traces_sample_rate=config("SENTRY_TRACES_SAMPLE_RATE", default=0.0, cast=float),
        send_default_pii=config("SENTRY_SEND_DEFAULT_PII", default=False, cast=bool),
    )
