import logging
from django.utils.deprecation import MiddlewareMixin
from django.http import JsonResponse
from SeatDesk.utils import verify_jwt_token
from accounts.models import UserActiveSession

logger = logging.getLogger(__name__)


def _unauthorized(message):
    return JsonResponse({
        'success': False,
        'message': message,
        'status_code': 401
    }, status=401)


class ValidateTokenMiddleware(MiddlewareMixin):
    """
    Middleware that blocks requests if the JWT access token is not validated
    """

    skip_paths = [
        '/accounts/login/',
        '/health/',
    ]

    def process_request(self, request):
        """
        Block request if JWT token is not valid, otherwise attach the operator
        to ``request.validated_user``
        """
        for skip_path in self.skip_paths:
            if request.path.startswith(skip_path):
                return None

        auth_header = request.headers.get('Authorization', '')

        if not auth_header.startswith('Bearer '):
            return _unauthorized('Authorization header required')

        token = auth_header[len('Bearer '):].strip()

        if not token:
            return _unauthorized('Access token required')

        payload = verify_jwt_token(token)
        if not payload:
            return _unauthorized('Invalid access token')

        try:
            session = UserActiveSession.objects.select_related('user_id').get(access_token=token)
        except UserActiveSession.DoesNotExist:
            return _unauthorized('Token not found in active sessions')

        user = session.user_id
        if str(user.user_id) != payload.get('user_id'):
            logger.warning("Token subject %s does not match session owner %s", payload.get('user_id'), user.user_id)
            return _unauthorized('Invalid access token')
        if not user.is_active:
            return _unauthorized('User is inactive')

        # refreshes last_access_datetime
        session.save(update_fields=['last_access_datetime'])

        request.validated_user = user
        request.user_payload = payload
        return None
