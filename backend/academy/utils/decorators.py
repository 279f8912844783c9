"""Custom decorators for authorization and validation."""
from functools import wraps

from flask import current_app
from flask_jwt_extended import get_jwt_identity

from academy import db
from academy.models.user import User, UserRole
from academy.services.feature_flags import FeatureFlags
from academy.utils.helpers import error_response


def _load_current_user():
    identity = get_jwt_identity()
    try:
        user = db.session.get(User, int(identity))
    except (TypeError, ValueError):
        return None
    if user is None or not user.is_active:
        return None
    return user


def roles_required(*roles):
    """Require one of ``roles``; the resolved user is passed as ``current_user``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = _load_current_user()

            if not user:
                return error_response("User not found", 404)

            if roles and user.role not in roles:
                return error_response("Access denied for role " + user.role.value, 403)

            kwargs['current_user'] = user
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def login_required(f):
    """Any active user."""
    return roles_required()(f)


def admin_required(f):
    """Decorator to require admin role."""
    return roles_required(UserRole.ADMIN)(f)


def staff_required(f):
    """Teachers, tutors and admins."""
    return roles_required(UserRole.TEACHER, UserRole.TUTOR, UserRole.ADMIN)(f)


def feature_required(feature_key):
    """Return 403 while ``feature_key`` is switched off."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            flags = FeatureFlags.load(current_app.config.get('FEATURE_FLAG_DEFAULTS'))
            if not flags.is_enabled(feature_key):
                return error_response(f"Feature '{feature_key}' is disabled", 403)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
