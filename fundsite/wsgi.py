"""
WSGI config for the calendar fundraiser site.

Exposes the module-level 'application' for WSGI servers (gunicorn, uWSGI).
"""
import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "fundsite.settings")
application = get_wsgi_application()
