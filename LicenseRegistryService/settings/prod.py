"""
Production settings for LicenseRegistryService.

SECRET_KEY and ALLOWED_HOSTS must come from the environment.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

SECRET_KEY = os.environ["SECRET_KEY"]

if not ALLOWED_HOSTS:  # noqa: F405
    raise RuntimeError("ALLOWED_HOSTS must be set in production")

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Keep a rotating copy of the JSON log next to stdout
LOG_FILE = os.environ.get("LOG_FILE")
if LOG_FILE:
    LOGGING["handlers"]["file"] = {  # noqa: F405
        "class": "logging.handlers.RotatingFileHandler",
        "filename": LOG_FILE,
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": 5,
        "formatter": "json",
    }
    for logger_config in [LOGGING["root"], *LOGGING["loggers"].values()]:  # noqa: F405
        logger_config["handlers"].append("file")
