"""
Service-layer errors.

Every error carries the HTTP status it maps to, a stable custom code for
clients, a user-safe message and optional context that is returned in the
response ``data`` so operators can see what was rejected.
"""
from rest_framework import status


class ServiceError(Exception):
    """Base error raised by allocation, issuance and scanning services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    custom_code = 9000
    default_message = "Internal Server Error"

    def __init__(self, message=None, data=None):
        self.message = message or self.default_message
        self.data = data or {}
        super().__init__(self.message)


class ValidationFailed(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    custom_code = 9400
    default_message = "Invalid request"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    custom_code = 9404
    default_message = "Not found"


class Conflict(ServiceError):
    """Capacity, contention and state conflicts. Safe for the caller to retry or review."""

    status_code = status.HTTP_409_CONFLICT
    custom_code = 9409
    default_message = "Conflict"


class EventNotFoundError(NotFound):
    custom_code = 3404
    default_message = "Event not found"


class SeatNotFoundError(NotFound):
    custom_code = 6404
    default_message = "Seat not found"


class TicketNotFoundError(NotFound):
    custom_code = 8404
    default_message = "Ticket not found"


class NoContiguousBlockError(Conflict):
    custom_code = 6101
    default_message = "Cannot find contiguous block"


class SeatsTakenError(Conflict):
    custom_code = 6102
    default_message = "Some seats were taken in parallel"


class SeatUnavailableError(Conflict):
    custom_code = 7101
    default_message = "Seat is no longer available"


class NotEnoughSeatsError(Conflict):
    custom_code = 7201
    default_message = "Not enough available seats for all recipients"


class InvalidTicketPayloadError(ValidationFailed):
    custom_code = 8101
    default_message = "QR code is not valid JSON"


class InvalidSignatureError(ValidationFailed):
    custom_code = 8102
    default_message = "Ticket signature is invalid"


class TicketAlreadyUsedError(Conflict):
    custom_code = 8201
    default_message = "Ticket already used"


class TicketCancelledError(Conflict):
    custom_code = 8202
    default_message = "Ticket has been cancelled"


class TicketNotValidError(Conflict):
    custom_code = 8203
    default_message = "Ticket is not valid"
