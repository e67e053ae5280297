"""
ASGI config for the MediScope project.

Every operation is a short request/response unit of work, so the plain
Django ASGI handler is enough; no WebSocket routing is mounted.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mediscope.settings")

application = get_asgi_application()
