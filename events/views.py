import logging
from django.db.models import F
from rest_framework import status
from SeatDesk.cache_utils import EVENTS_LIST_PREFIX, cache_api_response, invalidate_events_cache
from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsAdminOperator
from events.models import Events
from events.serializers import EventSerializer, PostEventSerializer, PutEventSerializer

logger = logging.getLogger(__name__)


class EventView(BaseAPIClass):
    model_class = Events
    permission_classes = [IsAdminOperator]
    post_serializer = PostEventSerializer

    @cache_api_response(EVENTS_LIST_PREFIX, timeout=60)
    def get(self, request):
        try:
            events = self.model_class.objects.order_by(
                F('starts_at').desc(nulls_last=True), '-created_at'
            )
            self.data = {"events": EventSerializer(events, many=True).data}
            self.message = "Events fetched successfully"
        except Exception as e:
            self.error_occurred(e, custom_code=3102)
        return self.get_response()

    def post(self, request):
        try:
            serializer = self.post_serializer(data=request.data)
            if serializer.is_valid():
                data = serializer.validated_data
                event = self.model_class.objects.create(
                    event_name=data['name'],
                    description=data.get('description') or None,
                    poster_url=data.get('poster_url') or None,
                    starts_at=data.get('starts_at'),
                    ends_at=data.get('ends_at'),
                    capacity=data['capacity'],
                )
                invalidate_events_cache()
                logger.info("Created event %s (%s)", event.events_id, event.event_name)

                self.data = EventSerializer(event).data
                self.code = status.HTTP_201_CREATED
                self.message = "Event created successfully"
            else:
                self.custom_code = 3111
                self.serializer_errors(serializer.errors)
        except Exception as e:
            self.error_occurred(e, custom_code=3112)
        return self.get_response()


class EventDetailView(BaseAPIClass):
    model_class = Events
    permission_classes = [IsAdminOperator]
    put_serializer = PutEventSerializer

    def put(self, request, event_id):
        try:
            serializer = self.put_serializer(data=request.data)
            if not serializer.is_valid():
                self.custom_code = 3121
                self.serializer_errors(serializer.errors)
                return self.get_response()

            try:
                event = self.model_class.objects.get(events_id=event_id)
            except Events.DoesNotExist:
                self.error_occurred(
                    e=None, custom_code=3404, code=status.HTTP_404_NOT_FOUND, message="Event not found"
                )
                return self.get_response()

            data = serializer.validated_data
            if 'name' in data:
                event.event_name = data['name']
            for field in ('description', 'starts_at', 'ends_at', 'capacity'):
                if data.get(field) is not None:
                    setattr(event, field, data[field])
            if 'poster_url' in data:
                event.poster_url = data['poster_url'] or None
            event.save()
            invalidate_events_cache()

            self.data = EventSerializer(event).data
            self.message = "Event updated successfully"
        except Exception as e:
            self.error_occurred(e, custom_code=3122)
        return self.get_response()
