"""
Core views for health checks and metrics exposition.
"""

from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "ok", "timestamp": timezone.now().isoformat()})


class MetricsView(View):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        """Return all registered metrics in text format."""
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
