"""
WSGI entry point for gunicorn (see gunicorn.conf.py).

DJANGO_ENV picks the settings module: production | test | anything else -> base.
"""

import os

from django.core.wsgi import get_wsgi_application

from config.env import settings_module_for

os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module_for(os.environ.get("DJANGO_ENV")))

application = get_wsgi_application()
