"""
Base Django settings for LicenseRegistryService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-3v%x7k!r0c@p1m9w^^zq(l8&*t_(b2e(a4!@+ng#5hs!1)2w(8"
)

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "").split(",") if host]

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "LicenseRegistryService.apps.LicenseRegistryServiceConfig",
    "core",
    "licenses",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
]

ROOT_URLCONF = "LicenseRegistryService.urls"

WSGI_APPLICATION = "LicenseRegistryService.wsgi.application"

# The registry is a flat JSON file; no database is used
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Routes are declared without trailing slashes
APPEND_SLASH = False

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Registry Service API",
    "DESCRIPTION": (
        "Issues, stores and validates desktop application licenses, "
        "including per-license user rosters and device binding."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "TAGS": [
        {"name": "Licenses", "description": "License issuance and administration"},
        {"name": "Validation", "description": "License, device and user validation"},
        {"name": "Users", "description": "Per-license user rosters"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# License registry
PORT = int(os.environ.get("PORT", "3000"))
LICENSE_REGISTRY_FILE = Path(os.environ.get("LICENSES_FILE", BASE_DIR / "licenses.json"))
LICENSE_KEY_PREFIX = "VET"
DEFAULT_VALIDITY_DAYS = 365
LOGIN_HISTORY_LIMIT = 100
EXPIRING_SOON_DAYS = 30
DEFAULT_LICENSE_NAME = "VetCare License"

# Observability
LOGGING = get_logging_config(ENVIRONMENT)
