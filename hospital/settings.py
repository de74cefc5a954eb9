"""
Settings for the hospital API.

Values come from the environment, optionally seeded from a ``.env`` file
next to ``manage.py``.  Records live in MongoDB (see ``core.store``);
Django itself runs without a relational database.
"""
from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv  # type: ignore

# -----------------------------------------------------------------------------
# Paths and .env
# -----------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def env_list(*names: str, default: str) -> list[str]:
    """Comma separated values from the first of ``names`` that is set."""
    raw = next((os.getenv(n) for n in names if os.getenv(n)), default)
    return [h.strip() for h in raw.split(",") if h.strip()]


# -----------------------------------------------------------------------------
# Environment flags
# -----------------------------------------------------------------------------
ENV = os.getenv("ENV", "dev")

# Never enabled in prod (checked below)
DEBUG = env_flag("DEBUG")

# Comma separated; the default suits local development and tests
ALLOWED_HOSTS: list[str] = env_list("ALLOWED_HOSTS", default="127.0.0.1,localhost,testserver")

# Signs bearer tokens too
SECRET_KEY = os.getenv("SECRET_KEY") or "replace-me-with-a-secure-secret-key"

# Refuse to start in prod with development values
if ENV == "prod":
    if DEBUG:
        raise RuntimeError("DEBUG must be 0 in prod")
    if "*" in ALLOWED_HOSTS:
        raise RuntimeError("ALLOWED_HOSTS cannot contain * in prod")
    if SECRET_KEY == "replace-me-with-a-secure-secret-key":
        raise RuntimeError("SECRET_KEY must be set securely in prod")

# -----------------------------------------------------------------------------
# Applications
# -----------------------------------------------------------------------------
INSTALLED_APPS = [
    "django_prometheus",
    "corsheaders",
    # contenttypes/auth are needed for imports only (password hashers,
    # simplejwt); no auth tables are used.
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    # Third-party apps
    "rest_framework",
    "drf_yasg",
    # Local apps
    "core",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
    "core.middleware.RequestLogMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "hospital.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "hospital.wsgi.application"

# -----------------------------------------------------------------------------
# Database configuration
# No relational database: every record lives in MongoDB.
# -----------------------------------------------------------------------------
DATABASES: dict[str, dict] = {}

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/hospital")
# Database name: explicit MONGODB_NAME, else the path of the URI, else "hospital"
MONGODB_NAME = os.getenv("MONGODB_NAME") or (urlparse(MONGODB_URI).path or "").lstrip("/") or "hospital"
MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

# -----------------------------------------------------------------------------
# Locale, time and static files
# -----------------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
# Mongo returns naive UTC datetimes; rendering treats naive values as UTC.
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# -----------------------------------------------------------------------------
# REST framework and tokens
# -----------------------------------------------------------------------------
# When enabled every API endpoint except login/register/health requires a
# valid bearer token.
API_REQUIRE_AUTH = env_flag("API_REQUIRE_AUTH")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.authentication.BearerTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "core.permissions.ApiAccess",
    ],
    "UNAUTHENTICATED_USER": None,
    # {"error": message} for every failure
    "EXCEPTION_HANDLER": "core.exceptions.api_exception_handler",
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", "1440"))),
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_CLAIM": "user_id",
}

# Routes have no trailing slash
APPEND_SLASH = False

# -----------------------------------------------------------------------------
# Swagger / OpenAPI
# -----------------------------------------------------------------------------
SWAGGER_SETTINGS = {
    "DEFAULT_INFO": "hospital.urls.api_info",
    "USE_SESSION_AUTH": False,
    "SECURITY_DEFINITIONS": {
        "Bearer": {"type": "apiKey", "name": "Authorization", "in": "header"},
    },
}

# -----------------------------------------------------------------------------
# CORS (front end dev server by default)
# -----------------------------------------------------------------------------
# ALLOWED_ORIGINS is the older name of the same setting
CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS", "ALLOWED_ORIGINS", default="http://localhost:3000")
CORS_ALLOW_CREDENTIALS = True

# Migration metrics need a relational database
PROMETHEUS_EXPORT_MIGRATIONS = False

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "core": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "pymongo": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}

# -----------------------------------------------------------------------------
# TLS termination at the proxy
# -----------------------------------------------------------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True
if ENV == "prod":
    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "3600"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = False
    SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", "1")
