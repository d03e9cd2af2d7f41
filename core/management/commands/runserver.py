"""
Development server that listens on settings.PORT by default.

An explicit `addrport` argument still takes precedence.
"""

from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    """runserver with the port taken from the PORT setting."""

    help = "Starts a lightweight web server for development on PORT (default 3000)."

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.default_port = str(settings.PORT)
