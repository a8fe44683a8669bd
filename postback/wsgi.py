"""WSGI entry point for the postback ingest service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "postback.settings")

application = get_wsgi_application()
