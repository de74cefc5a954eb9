"""
WSGI config for the hospital API.

Exposes the WSGI callable as ``application``; the MongoDB connection is
opened lazily on the first request that needs it.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

application = get_wsgi_application()
