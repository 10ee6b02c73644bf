from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa

DEBUG = env.bool("DEBUG", default=False)

SECRET_KEY = env_get("DJANGO_SECRET_KEY")

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SECURE_CONTENT_TYPE_NOSNIFF = env.bool("SECURE_CONTENT_TYPE_NOSNIFF", default=True)

# Persistent connections shared by the gthread workers
DATABASES["default"]["CONN_MAX_AGE"] = env.int("CONN_MAX_AGE", default=60)

if not HOMESERVER_REGISTER_URL or not HOMESERVER_AS_TOKEN:
    raise ImproperlyConfigured("HOMESERVER_REGISTER_URL and HOMESERVER_AS_TOKEN are required")
