from functools import wraps

from flask import current_app, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from libms.exceptions import Forbidden


def role_required(*roles):
    """Require a valid access token whose `role` claim is one of `roles`."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            role = get_jwt().get("role")
            if role not in roles:
                current_app.logger.warning(
                    f"[auth] forbidden {request.method} {request.path} user={get_jwt_identity()} role={role}"
                )
                raise Forbidden(f"Requires role: {', '.join(roles)}.")
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_user_id() -> str:
    return str(get_jwt_identity())
