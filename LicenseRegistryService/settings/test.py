"""
Test settings for LicenseRegistryService.
"""

import tempfile
from pathlib import Path

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Tests swap in their own registry; never touch the working copy
LICENSE_REGISTRY_FILE = Path(tempfile.gettempdir()) / "license-registry-test.json"

# Disable logging during tests
LOGGING_CONFIG = None
