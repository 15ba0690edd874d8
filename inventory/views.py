"""
Admin seat map and auto-assign views
"""
from django.utils import timezone
from rest_framework import status
from SeatDesk.cache_utils import SEAT_MAP_PREFIX, cache_api_response
from SeatDesk.exceptions import ServiceError
from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsAdminOperator
from SeatDesk.utils import isoformat
from events.models import Events
from inventory.allocator import SeatAllocator
from inventory.models import Seat
from inventory.serializers import AutoAssignSerializer, SeatSerializer


class SeatMapView(BaseAPIClass):
    """All seats of an event in row/column order"""
    permission_classes = [IsAdminOperator]

    @cache_api_response(SEAT_MAP_PREFIX, timeout=15)
    def get(self, request, event_id):
        try:
            if not Events.objects.filter(events_id=event_id).exists():
                self.error_occurred(
                    e=None, custom_code=6404, code=status.HTTP_404_NOT_FOUND, message="Event not found"
                )
                return self.get_response()

            seats = Seat.objects.filter(event_id=event_id).order_by('row_idx', 'col_idx')
            serializer = SeatSerializer(seats, many=True, context={'now': timezone.now()})
            self.data = {
                'seats': serializer.data,
                'total_seats': len(serializer.data),
            }
            self.message = "Seats retrieved successfully"
        except Exception as e:
            self.error_occurred(e, message="Failed to retrieve seats", custom_code=6015)
        return self.get_response()


class AutoAssignView(BaseAPIClass):
    """Reserve a contiguous block of seats in one row"""
    permission_classes = [IsAdminOperator]
    allocator_class = SeatAllocator

    def post(self, request, event_id):
        try:
            serializer = AutoAssignSerializer(data=request.data)
            if not serializer.is_valid():
                self.custom_code = 6100
                self.serializer_errors(serializer.errors)
                return self.get_response()

            reservation = self.allocator_class().auto_assign(event_id, serializer.validated_data['qty'])
            self.data = {
                'reserved': [str(seat_id) for seat_id in reservation.seat_ids],
                'reservedToken': reservation.token,
                'reservedUntil': isoformat(reservation.reserved_until),
            }
            self.message = "Seats reserved"
        except ServiceError as err:
            self.service_error(err)
        except Exception as e:
            self.error_occurred(e, message="Auto-assign failed", custom_code=6103)
        return self.get_response()
