import json
import logging
import time

from django.conf import settings
from django.http import StreamingHttpResponse

from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsAdminOperator
from analytics.snapshot import build_snapshot

logger = logging.getLogger(__name__)


def snapshot_events(interval, sleep=time.sleep):
    """
    Yield server-sent events carrying a fresh snapshot every ``interval``
    seconds. A failed snapshot is reported as an ``error`` event and the
    stream keeps going.
    """
    while True:
        try:
            yield f"data: {json.dumps(build_snapshot())}\n\n"
        except Exception as e:
            logger.exception("Analytics stream snapshot failed")
            yield f"event: error\ndata: {json.dumps({'error': str(e) or 'failed'})}\n\n"
        sleep(interval)


class AnalyticsOverviewView(BaseAPIClass):
    """Point-in-time dashboard snapshot"""
    permission_classes = [IsAdminOperator]

    def get(self, request):
        try:
            self.data = build_snapshot()
        except Exception as e:
            self.error_occurred(e, message="Failed to retrieve analytics data", custom_code=5004)
        return self.get_response()


class AnalyticsStreamView(BaseAPIClass):
    """Live dashboard feed over server-sent events"""
    permission_classes = [IsAdminOperator]

    def get(self, request):
        response = StreamingHttpResponse(
            snapshot_events(settings.ANALYTICS_REFRESH_SECONDS),
            content_type="text/event-stream",
        )
        response["Cache-Control"] = "no-cache, no-transform"
        response["X-Accel-Buffering"] = "no"
        return response
