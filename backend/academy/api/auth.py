"""Authentication API: login, tokens and account administration."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from academy import db, limiter
from academy.models.user import CEFRLevel, User, UserRole
from academy.services.auth_service import AuthService
from academy.utils.decorators import admin_required, login_required
from academy.utils.helpers import error_response, success_response
from academy.utils.validators import ValidationError, validate_level

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return success_response(message="Auth service is running")


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Email and password login for every role."""
    try:
        data = request.get_json(silent=True)

        if not data:
            return error_response("Request body must be JSON", 400)

        email = (data.get("email") or "").strip()
        password = data.get("password") or ""

        if not email or not password:
            return error_response("Email and password are required", 400)

        result, error = AuthService.login(email, password)

        if error:
            return error_response(error, 401)

        return success_response(
            data=result,
            message="Login successful"
        )

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Login failed")
        return error_response("Login error", 500)


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh_token():
    """Refresh access token."""
    identity = get_jwt_identity()
    user = db.session.get(User, int(identity))

    if not user or not user.is_active:
        return error_response("User not found", 404)

    new_access_token = create_access_token(identity=identity, additional_claims={"role": user.role.value})

    return success_response(
        data={
            "access_token": new_access_token
        },
        message="Token refreshed successfully"
    )


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
@login_required
def get_current_user(current_user):
    """Get current user profile."""
    return success_response(data=current_user.to_dict())


@auth_bp.route("/change-password", methods=["POST"])
@jwt_required()
@login_required
def change_password(current_user):
    """Change password for authenticated user."""
    data = request.get_json(silent=True)

    if not data:
        return error_response("Request body must be JSON", 400)

    current_password = data.get("current_password", "")
    new_password = data.get("new_password", "")

    if not current_password or not new_password:
        return error_response("Current and new passwords are required", 400)

    if not current_user.check_password(current_password):
        return error_response("Current password is incorrect", 400)

    if len(new_password) < 6:
        return error_response("New password must be at least 6 characters", 400)

    if new_password == current_password:
        return error_response("New password must be different from current password", 400)

    try:
        current_user.set_password(new_password)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Password change failed")
        return error_response("Password change error", 500)

    return success_response(message="Password changed successfully")


@auth_bp.route("/users", methods=["GET"])
@jwt_required()
@admin_required
def list_users(current_user):
    """List accounts, optionally filtered by role."""
    query = User.query
    role = request.args.get("role")
    if role:
        try:
            query = query.filter_by(role=UserRole(role))
        except ValueError:
            return error_response(f"Invalid role: {role}", 400)
    users = query.order_by(User.name).all()
    return success_response(data=[user.to_dict() for user in users])


@auth_bp.route("/users", methods=["POST"])
@jwt_required()
@admin_required
def create_user(current_user):
    """Create an account of any role."""
    data = request.get_json(silent=True)

    if not data:
        return error_response("Request body must be JSON", 400)

    try:
        user, error = AuthService.create_user(
            data.get("email"),
            data.get("password"),
            data.get("name"),
            role=data.get("role", "student"),
            level=data.get("level"),
        )
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("User creation failed")
        return error_response("Error creating user", 500)

    if error:
        return error_response(error, 400)

    return success_response(data=user, message="User created successfully"), 201


@auth_bp.route("/users/<int:user_id>/level", methods=["PUT"])
@jwt_required()
@admin_required
def set_level(user_id, current_user):
    """Place a student in a level; ``null`` removes the placement."""
    user = User.get_or_404(user_id)
    if user.role != UserRole.STUDENT:
        return error_response("Only students have a level", 400)

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "level" not in data:
        return error_response("level is required", 400)

    try:
        level = validate_level(data["level"])
        user.level = CEFRLevel(level) if level else None
        db.session.commit()
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Level assignment failed for user %s", user_id)
        return error_response("Error updating level", 500)

    return success_response(data=user.to_dict(), message="Level updated")


@auth_bp.route("/users/<int:user_id>/status", methods=["PUT"])
@jwt_required()
@admin_required
def set_status(user_id, current_user):
    """Activate or deactivate an account."""
    user = User.get_or_404(user_id)
    data = request.get_json(silent=True) or {}
    if "is_active" not in data:
        return error_response("is_active is required", 400)
    if user.id == current_user.id and not data["is_active"]:
        return error_response("You cannot deactivate your own account", 400)

    user.is_active = bool(data["is_active"])
    db.session.commit()
    return success_response(data=user.to_dict(), message="Status updated")
