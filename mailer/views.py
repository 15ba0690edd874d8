from SeatDesk.exceptions import ServiceError
from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsAdminOperator
from mailer.bulk import BulkTicketMailer
from mailer.serializers import BulkEmailSerializer
from tickets.issuance import TicketIssuer
from tickets.signing import default_signer


class BulkEmailView(BaseAPIClass):
    """Issue a ticket per recipient and queue the ticket emails"""
    permission_classes = [IsAdminOperator]
    bulk_serializer = BulkEmailSerializer

    def post(self, request):
        try:
            serializer = self.bulk_serializer(data=request.data)
            if not serializer.is_valid():
                self.custom_code = 7200
                self.serializer_errors(serializer.errors)
                return self.get_response()

            data = serializer.validated_data
            mailer = BulkTicketMailer(TicketIssuer(default_signer()))
            result = mailer.issue_and_queue(
                data['event_id'],
                data['list'],
                subject=data.get('subject'),
                body_template=data.get('bodyTemplate'),
            )
            self.data = {'queued': result.queued, 'details': result.details}
            self.message = f"Queued {result.queued} ticket emails"
        except ServiceError as err:
            self.service_error(err)
        except Exception as e:
            self.error_occurred(e, message="Bulk email failed", custom_code=7202)
        return self.get_response()
