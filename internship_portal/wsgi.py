"""
WSGI config for the internship portal.

This exposes the WSGI callable as a module-level variable named ``application``
for WSGI servers such as Gunicorn.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "internship_portal.settings")

application = get_wsgi_application()
