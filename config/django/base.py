import os

from config.env import BASE_DIR, env, env_get

env.read_env(os.path.join(BASE_DIR, env("ENV_FILE", default=".env")))

DEBUG = env.bool("DEBUG", default=True)

SECRET_KEY = env_get("DJANGO_SECRET_KEY", default="django-insecure-regservice-dev-key")

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["*"])

LOCAL_APPS = [
    "src.accounts.apps.AccountsConfig",
    "src.homeserver.apps.HomeserverConfig",
]

THIRD_PARTY_APPS = [
    "ninja_extra",
    "django_structlog",
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    *THIRD_PARTY_APPS,
    *LOCAL_APPS,
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_structlog.middlewares.RequestMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# One row per registered address; postgres in deployments (psycopg 3)
DATABASES = {
    "default": env.db(
        "DATABASE_URL",
        default=f"sqlite:///{os.path.join(BASE_DIR, 'db.sqlite3')}",
    ),
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "regservice",
    }
}

from config.settings.homeserver import *  # noqa
from config.settings.throttling import *  # noqa
from config.settings.logging import *  # noqa
