from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthView(APIView):
    """Liveness probe, served without authentication"""

    def get(self, request):
        return Response({"status": "ok", "timestamp": timezone.now().isoformat()})
