from rest_framework.permissions import BasePermission
from accounts.models import User


class OperatorTypePermission(BasePermission):
    """Allow operators whose user_type is in ``allowed_types``"""

    allowed_types = ()

    def has_permission(self, request, view):
        user = getattr(request, 'validated_user', None)
        return user is not None and user.has_role(*self.allowed_types)


class IsAdminOperator(OperatorTypePermission):
    message = "Admin access required"
    allowed_types = (User.USER_TYPE.ADMIN,)


class IsScannerOperator(OperatorTypePermission):
    message = "Scanner access required"
    allowed_types = (User.USER_TYPE.ADMIN, User.USER_TYPE.SCANNER)
