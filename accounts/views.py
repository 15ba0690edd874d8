import logging
from django.db import transaction
from django.utils import timezone
from rest_framework import status
from SeatDesk.helper import BaseAPIClass
from SeatDesk.utils import enum_label, generate_jwt_token, isoformat
from accounts.serializers import LoginSerializer
from accounts.models import User, UserActiveSession

logger = logging.getLogger(__name__)


class LoginView(BaseAPIClass):
    model_class = User
    login_serializer = LoginSerializer

    def post(self, request):
        try:
            serializer = self.login_serializer(data=request.data)
            if serializer.is_valid():
                email = serializer.validated_data['email']
                password = serializer.validated_data['password']

                user = self.model_class.objects.filter(email=email).first()
                if user is None or not user.check_password(password):
                    self.error_occurred(
                        e=None, custom_code=1201, code=status.HTTP_401_UNAUTHORIZED,
                        message="Invalid email or password",
                    )
                    return self.get_response()

                if not user.is_active:
                    self.error_occurred(
                        e=None, custom_code=1202, code=status.HTTP_403_FORBIDDEN,
                        message="User is inactive",
                    )
                    return self.get_response()

                access_token = generate_jwt_token(user.user_id, user.email, user.name)

                # one active session per operator; logging in again ends the previous one
                with transaction.atomic():
                    previous = UserActiveSession.objects.filter(user_id=user).first()
                    if previous is not None:
                        previous.end()
                    UserActiveSession.objects.create(user_id=user, access_token=access_token)
                    user.last_login_at = timezone.now()
                    user.save(update_fields=['last_login_at'])
                logger.info("Operator %s logged in", user.email)

                self.data = {
                    'user_id': str(user.user_id),
                    'email': user.email,
                    'name': user.name,
                    'user_type': enum_label(User.USER_TYPE, user.user_type),
                    'access_token': access_token,
                    'token_type': 'Bearer'
                }
                self.message = "Login successful"
            else:
                self.custom_code = 1203
                self.serializer_errors(serializer.errors)
        except Exception as e:
            self.error_occurred(e, message="Login failed", custom_code=1204)
        return self.get_response()


class LogoutView(BaseAPIClass):
    def post(self, request):
        try:
            access_token = request.headers.get('Authorization', '').replace('Bearer ', '')
            UserActiveSession.objects.get(access_token=access_token).end()
            self.message = "Logout successful"
        except UserActiveSession.DoesNotExist:
            self.error_occurred(
                e=None, custom_code=1106, code=status.HTTP_401_UNAUTHORIZED,
                message="Invalid or expired token",
            )
        except Exception as e:
            self.error_occurred(e, message="Logout failed", custom_code=1108)
        return self.get_response()


class ProfileView(BaseAPIClass):
    def get(self, request):
        """
        Get the authenticated operator's profile
        """
        user = request.validated_user
        self.data = {
            'user_id': str(user.user_id),
            'email': user.email,
            'name': user.name,
            'user_type': enum_label(User.USER_TYPE, user.user_type),
            'created_at': user.created_at.isoformat(),
            'updated_at': user.updated_at.isoformat(),
            'status': enum_label(User.USER_STATUS, user.status),
            'last_login_at': isoformat(user.last_login_at),
        }
        self.message = "Profile retrieved successfully"
        return self.get_response()
