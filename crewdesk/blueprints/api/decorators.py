"""
JWT authentication decorators for the REST API.

Tokens are issued by the identity service; this API only verifies them.
The token carries the actor id (`sub`) and role, no user lookup is made.
"""
from collections import namedtuple
from functools import wraps
from datetime import datetime, timedelta, timezone

import jwt
from flask import request, jsonify, current_app

# Highest privilege first
ROLE_HIERARCHY = ['admin', 'scheduler', 'crew']

ApiActor = namedtuple('ApiActor', ['id', 'role'])


def _secret():
    return current_app.config.get('JWT_SECRET_KEY') or current_app.config['SECRET_KEY']


def create_access_token(actor_id, role, expires_minutes=None):
    """Create a JWT access token."""
    if expires_minutes is None:
        expires_minutes = current_app.config.get('JWT_ACCESS_TOKEN_MINUTES', 60)
    payload = {
        'sub': str(actor_id),
        'role': role,
        'type': 'access',
        'iat': datetime.now(timezone.utc),
        'exp': datetime.now(timezone.utc) + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, _secret(), algorithm='HS256')


def decode_token(token):
    """Decode and validate a JWT token. Returns payload or None."""
    try:
        payload = jwt.decode(
            token,
            _secret(),
            algorithms=['HS256'],
        )
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def _auth_error(code, message, status=401):
    return jsonify({'error': {'code': code, 'message': message}}), status


def get_current_actor():
    """Extract the actor from the Authorization header. Returns (actor, error_response)."""
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None, _auth_error('missing_token', 'Authorization header with Bearer token required.')

    token = auth_header[7:]  # Strip "Bearer "
    payload = decode_token(token)

    if payload is None:
        return None, _auth_error('invalid_token', 'Token is invalid or expired.')

    if payload.get('type') != 'access':
        return None, _auth_error('wrong_token_type', 'Access token required (not refresh token).')

    actor_id = payload.get('sub')
    role = payload.get('role')
    if not actor_id or role not in ROLE_HIERARCHY:
        return None, _auth_error('invalid_token', 'Token is missing a valid subject or role.')

    return ApiActor(id=actor_id, role=role), None


def jwt_required(f):
    """Decorator: require valid JWT access token."""
    @wraps(f)
    def decorated(*args, **kwargs):
        actor, error = get_current_actor()
        if error:
            return error
        request.api_actor = actor
        return f(*args, **kwargs)
    return decorated


def requires_role(min_role):
    """Decorator: require a minimum role (RBAC).

    Usage: @requires_role('scheduler')
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            actor, error = get_current_actor()
            if error:
                return error

            # Check role hierarchy
            actor_index = ROLE_HIERARCHY.index(actor.role)
            required_index = ROLE_HIERARCHY.index(min_role)
            if actor_index > required_index:
                return _auth_error('forbidden', 'Insufficient permissions.', 403)

            request.api_actor = actor
            return f(*args, **kwargs)
        return decorated
    return decorator
