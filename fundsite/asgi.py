"""
ASGI config for the calendar fundraiser site.

Exposes the module-level 'application' for ASGI servers (uvicorn, daphne).
"""
import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "fundsite.settings")
application = get_asgi_application()
