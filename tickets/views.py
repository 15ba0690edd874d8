from decimal import Decimal
from SeatDesk.exceptions import ServiceError
from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsAdminOperator
from tickets.issuance import TicketIssuer
from tickets.serializers import CreateTicketSerializer
from tickets.signing import default_signer


class TicketCreateView(BaseAPIClass):
    """Manually issue a ticket for one seat"""
    permission_classes = [IsAdminOperator]
    create_serializer = CreateTicketSerializer

    def post(self, request):
        try:
            serializer = self.create_serializer(data=request.data)
            if not serializer.is_valid():
                self.custom_code = 7100
                self.serializer_errors(serializer.errors)
                return self.get_response()

            data = serializer.validated_data
            issued = TicketIssuer(default_signer()).issue(
                event_id=data['event_id'],
                seat_id=data['seat_id'],
                user_email=data['user_email'],
                user_name=data.get('user_name', ''),
                price=data.get('price') or Decimal("0"),
                reserved_token=data.get('reserved_token') or None,
            )
            self.data = {
                'ticketId': str(issued.ticket.ticket_id),
                'ticketCode': issued.ticket.ticket_code,
                'qrDataUrl': issued.qr_data_url,
            }
            self.message = "Ticket issued"
        except ServiceError as err:
            self.service_error(err)
        except Exception as e:
            self.error_occurred(e, message="Ticket creation failed", custom_code=7102)
        return self.get_response()
