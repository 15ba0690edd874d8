import logging
from rest_framework.views import APIView
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class BaseAPIClass(APIView):
    """
    Base API class that provides common response handling methods
    for all API endpoints in the application.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.success = True
        self.message = None
        self.code = status.HTTP_200_OK
        self.custom_code = None
        self.exceptionObj = None
        self.data = {}

    def get_response(self):
        """
        Generate a standardized response envelope
        """
        to_return = {
            "success": self.success,
            "message": self.message if self.message else "Success",
            "data": self.data,
        }
        if self.custom_code:
            to_return["custom_code"] = self.custom_code

        logger.debug("%s %s -> %s %s", self.request.method, self.request.path, self.code, to_return["message"])
        return Response(to_return, status=self.code)

    def error_occurred(self, e, custom_code=None, code=None, message=None, **kwargs):
        """
        Mark the response as failed. Without an explicit code this is a 500
        and the exception (if any) is logged with its traceback.
        """
        self.success = False
        self.message = message or self.message or "Internal Server Error"
        self.code = code or status.HTTP_500_INTERNAL_SERVER_ERROR
        self.custom_code = custom_code if custom_code else self.custom_code
        self.data = kwargs
        self.exceptionObj = e
        if e is not None:
            logger.exception("Unhandled error (custom_code=%s): %s", self.custom_code, e)

    def service_error(self, err):
        """
        Map a ServiceError raised by a service onto the response
        """
        self.success = False
        self.message = err.message
        self.code = err.status_code
        self.custom_code = err.custom_code
        self.data = err.data
        self.exceptionObj = err

    def handle_exception(self, exc):
        """
        Render DRF exceptions (permission denied, malformed body, ...) in the standard envelope
        """
        if isinstance(exc, exceptions.APIException):
            detail = exc.detail
            message = detail if isinstance(detail, str) else str(exc)
            self.error_occurred(e=None, code=exc.status_code, message=message)
            return self.get_response()
        return super().handle_exception(exc)

    def _process_error(self, key, value):
        """
        Process individual error items recursively
        """
        message = ""
        if isinstance(value, list):
            for item in value:
                if isinstance(item, (list, dict)):
                    message += self._process_error(key, item)
                else:
                    message += f"{key} - {item}; "
        elif isinstance(value, dict):
            for sub_key, sub_value in value.items():
                if sub_key == "non_field_errors":
                    message += f"{key} - "
                message += self._process_error(sub_key, sub_value)
        else:
            if key == "non_field_errors":
                message += f"{value}; "
            else:
                message += f"{key} - {value}; "
        return message

    def serializer_errors(self, errors):
        """
        Process serializer validation errors and format them into a readable message
        """
        message = ""
        for key, value in errors.items():
            if key == "non_field_errors":
                for item in value:
                    message += f"{item}; "
                continue
            message += self._process_error(key, value)

        self.success = False
        self.message = message.strip()
        self.code = status.HTTP_400_BAD_REQUEST
