from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import request, current_app

from padel_api.errors import AuthenticationError

_ALGORITHM = 'HS256'


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as carried in the bearer token."""
    id: int
    email: str
    name: str


def generate_token(user):
    """Sign a bearer token carrying the user's id, email and name."""
    payload = {
        'id': user.id,
        'email': user.email,
        'name': user.name,
        'exp': datetime.now(timezone.utc) + timedelta(
            hours=current_app.config.get('JWT_EXPIRATION_HOURS', 24 * 7)
        ),
    }
    return jwt.encode(payload, current_app.config['SECRET_KEY'], algorithm=_ALGORITHM)


def _normalize_bearer_token(raw_token):
    token = str(raw_token or '').strip()
    if token.startswith('Bearer '):
        token = token.split(' ', 1)[1].strip()
    return token


def verify_token(token):
    """Decode a bearer token into an Identity, raising AuthenticationError."""
    normalized = _normalize_bearer_token(token)
    if not normalized:
        raise AuthenticationError('Authentication required')
    try:
        payload = jwt.decode(
            normalized, current_app.config['SECRET_KEY'], algorithms=[_ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError('Token expired')
    except jwt.InvalidTokenError:
        raise AuthenticationError('Invalid token')

    if payload.get('id') is None:
        raise AuthenticationError('Invalid token')
    return Identity(
        id=payload['id'],
        email=payload.get('email', ''),
        name=payload.get('name', ''),
    )


def login_required(f):
    """Require a bearer token and pass the caller's Identity as the first argument."""
    @wraps(f)
    def decorated(*args, **kwargs):
        identity = verify_token(request.headers.get('Authorization', ''))
        return f(identity, *args, **kwargs)
    return decorated
