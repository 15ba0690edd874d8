from uuid import uuid4
from django.db import models
from django_enumfield import enum
from django.contrib.auth.hashers import make_password, check_password


class User(models.Model):
    """A console operator: an admin running events or a door scanner"""

    class Meta:
        db_table = "operator"

    class USER_STATUS(enum.Enum):
        ACTIVE = 1
        INACTIVE = 2

    class USER_TYPE(enum.Enum):
        ADMIN = 1
        SCANNER = 2

    user_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=256)
    user_type = enum.EnumField(USER_TYPE, default=USER_TYPE.SCANNER)
    status = enum.EnumField(USER_STATUS, default=USER_STATUS.ACTIVE)
    last_login_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.email

    @property
    def is_active(self):
        return self.status == User.USER_STATUS.ACTIVE

    def has_role(self, *user_types):
        return self.user_type in user_types

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)


class UserActiveSession(models.Model):
    """The one live access token of an operator"""

    class Meta:
        db_table = "operator_session"

    user_active_session_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    user_id = models.OneToOneField(User, on_delete=models.CASCADE, related_name="active_session")
    # full JWT, name and email claims included
    access_token = models.CharField(max_length=500, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_access_datetime = models.DateTimeField(auto_now=True)

    def end(self):
        """Move the session to history and revoke its token"""
        UserSessionDump.objects.create(user_id=self.user_id, started_at=self.created_at)
        self.delete()


class UserSessionDump(models.Model):
    """Audit row written when a session ends"""

    class Meta:
        db_table = "operator_session_history"

    user_session_dump_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    user_id = models.ForeignKey(User, on_delete=models.CASCADE, related_name="session_history")
    started_at = models.DateTimeField()
    ended_at = models.DateTimeField(auto_now_add=True)
