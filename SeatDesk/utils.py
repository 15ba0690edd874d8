import jwt
from uuid import uuid4
from datetime import timedelta
from django.conf import settings
from django.utils import timezone


def generate_jwt_token(user_id, email, name):
    """
    Generate a JWT access token for a console operator
    """
    token_lifetime = getattr(settings, 'JWT_ACCESS_TOKEN_LIFETIME', 24)
    issued_at = timezone.now()

    payload = {
        'user_id': str(user_id),
        'email': email,
        'name': name,
        'exp': issued_at + timedelta(hours=token_lifetime),
        'iat': issued_at,
        'type': 'access',
        'jti': uuid4().hex,
    }

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm='HS256')


def verify_jwt_token(token):
    """
    Verify and decode a JWT token. Returns None when the token is expired or invalid.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def enum_label(enum_class, value):
    """Lower-case member name for an enum value read from an EnumField (member or raw int)"""
    if value is None:
        return None
    return enum_class(int(value)).name.lower()


def isoformat(value):
    """ISO-8601 string for a datetime, empty string for None"""
    return value.isoformat() if value else ""
