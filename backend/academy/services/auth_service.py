"""Authentication service for user management."""
import logging

from flask_jwt_extended import create_access_token, create_refresh_token

from academy import db
from academy.models.base import utcnow
from academy.models.user import CEFRLevel, User, UserRole
from academy.utils.validators import Validator, validate_level

logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> dict:
    identity = str(user.id)
    return {
        "access_token": create_access_token(identity=identity, additional_claims={"role": user.role.value}),
        "refresh_token": create_refresh_token(identity=identity),
    }


class AuthService:

    @staticmethod
    def login(email: str, password: str) -> tuple[dict, str]:
        """Authenticate user and return tokens."""
        if not email or not password:
            return None, "Email and password are required"

        if not Validator.validate_email(email):
            return None, "Invalid email format"

        user = User.query.filter_by(email=email.lower().strip()).first()

        if not user:
            return None, "Invalid email or password"

        if not user.check_password(password):
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
            db.session.commit()
            logger.warning("Failed login for user %s", user.id)
            return None, "Invalid email or password"

        if not user.is_active:
            return None, "Account is deactivated"

        user.failed_login_attempts = 0
        user.last_login = utcnow()
        db.session.commit()

        result = issue_tokens(user)
        result["user"] = user.to_dict()
        return result, None

    @staticmethod
    def create_user(email: str, password: str, name: str, role: str = "student",
                    level: str = None) -> tuple[dict, str]:
        """Create a user account (admin only)."""
        if not Validator.validate_email(email or ''):
            return None, "Invalid email format"

        password_check = Validator.validate_password(password)
        if not password_check["is_valid"]:
            return None, password_check["errors"][0]

        name_check = Validator.validate_name(name)
        if not name_check["is_valid"]:
            return None, name_check["errors"][0]

        try:
            user_role = UserRole(str(role).lower())
        except ValueError:
            return None, f"Invalid role: {role}"

        email = email.lower().strip()
        if User.query.filter_by(email=email).first():
            return None, "Email already registered"

        level = validate_level(level)
        if level and user_role != UserRole.STUDENT:
            return None, "Only students have a level"

        user = User(
            email=email,
            name=name.strip(),
            role=user_role,
            level=CEFRLevel(level) if level else None,
        )
        user.set_password(password)
        user.save()
        logger.info("Created %s account %s", user_role.value, user.id)
        return user.to_dict(), None
