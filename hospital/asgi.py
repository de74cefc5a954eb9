"""
ASGI config for hospital project.

It exposes the ASGI callable as a module-level variable named
``application`` for servers such as uvicorn or daphne.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hospital.settings")

application = get_asgi_application()
