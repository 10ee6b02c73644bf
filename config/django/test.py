import os

from .base import *  # noqa

DEBUG = False

SECRET_KEY = "regservice-test-key"

# File-backed so that threads get their own connections and real locking
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.path.join(BASE_DIR, "db.sqlite3"),  # noqa: F405
        "TEST": {"NAME": os.path.join(BASE_DIR, "test-db.sqlite3")},  # noqa: F405
    }
}

HOMESERVER_REGISTER_URL = "https://hs.test/_matrix/client/r0/admin/register"
HOMESERVER_AS_TOKEN = "as-test-token"
HOMESERVER_TIMEOUT = 2.0

REGISTRATION_THROTTLE_RATE = "10000/min"
