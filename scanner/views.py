from SeatDesk.exceptions import ServiceError
from SeatDesk.helper import BaseAPIClass
from SeatDesk.permissions import IsScannerOperator
from scanner.serializers import VerifyQrSerializer
from scanner.verifier import ScanVerifier
from tickets.signing import default_signer


class VerifyQrView(BaseAPIClass):
    """Validate and redeem a scanned ticket QR code"""
    permission_classes = [IsScannerOperator]

    def post(self, request):
        try:
            serializer = VerifyQrSerializer(data=request.data)
            if not serializer.is_valid():
                self.message = "QR payload missing"
                self.error_occurred(e=None, code=400, custom_code=8100)
                return self.get_response()

            self.data = ScanVerifier(default_signer()).verify(serializer.validated_data['qr'])
            self.message = self.data['message']
        except ServiceError as err:
            self.service_error(err)
        except Exception as e:
            self.error_occurred(e, message="Ticket verification failed", custom_code=8500)
        return self.get_response()
