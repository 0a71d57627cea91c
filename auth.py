"""
Auth utilities for Flask routes.

Resolves the current player from an HS256 JWT in the Authorization header.
The username comes from the 'username' claim (falling back to 'sub').
Requests without a valid token play as 'anonymous'.
"""

import functools
from datetime import datetime, timedelta, timezone

import jwt
from flask import request, jsonify, g

import config

ANONYMOUS = "anonymous"


def issue_token(username, secret=None, expires_in=timedelta(days=30)):
    """Mint a token for `username`. Used by the CLI tools and tests."""
    payload = {
        "sub": username,
        "username": username,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret or config.JWT_SECRET, algorithm="HS256")


def get_current_username():
    """
    Extract and verify the JWT from Authorization header.
    Returns the username, or 'anonymous' if no valid token.
    Caches result in flask.g for the duration of the request.
    """
    if hasattr(g, "_current_username"):
        return g._current_username

    g._current_username = ANONYMOUS

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return ANONYMOUS

    token = auth_header[7:]

    if not config.JWT_SECRET:
        # No JWT secret configured, cannot verify tokens
        return ANONYMOUS

    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return ANONYMOUS
    except jwt.InvalidTokenError:
        return ANONYMOUS

    username = payload.get("username") or payload.get("sub")
    if username:
        g._current_username = username
    return g._current_username


def require_user(f):
    """
    Decorator: require a signed-in player.
    Returns 401 if the request carries no valid token.
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if get_current_username() == ANONYMOUS:
            return jsonify({
                "status": "error",
                "errorKind": "Unauthorized",
                "message": "Sign in to play",
            }), 401
        return f(*args, **kwargs)
    return decorated
