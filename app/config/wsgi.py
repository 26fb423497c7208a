"""
WSGI config for the Django application.

Serves the REST API only. The chat WebSocket needs the ASGI application in
config/asgi.py; use WSGI just for deployments that split HTTP from WebSocket
traffic.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
