"""User model for authentication and authorization."""
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash
from academy import db
from academy.models.base import BaseModel


class UserRole(Enum):
    """User roles enumeration."""
    STUDENT = 'student'
    TUTOR = 'tutor'
    TEACHER = 'teacher'
    ADMIN = 'admin'


class CEFRLevel(Enum):
    """Proficiency levels a student can be placed in."""
    A1 = 'A1'
    A2 = 'A2'
    B1 = 'B1'
    B2 = 'B2'
    C1 = 'C1'
    C2 = 'C2'


STAFF_ROLES = (UserRole.TEACHER, UserRole.TUTOR, UserRole.ADMIN)


class User(BaseModel):
    """User model for all system users."""

    __tablename__ = 'users'

    # Basic Information
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)

    # Role and Level
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.STUDENT)
    level = db.Column(db.Enum(CEFRLevel), nullable=True)  # students only

    # Account state
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)
    failed_login_attempts = db.Column(db.Integer, default=0)

    # Contact Information
    phone = db.Column(db.String(20), nullable=True)
    timezone = db.Column(db.String(64), nullable=True)

    def set_password(self, password: str) -> None:
        """Set user password with hashing."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check if provided password matches user's password."""
        return check_password_hash(self.password_hash, password)

    def is_staff(self) -> bool:
        """Teachers, tutors and admins."""
        return self.role in STAFF_ROLES

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_student(self) -> bool:
        """Check if user is a student."""
        return self.role == UserRole.STUDENT

    @property
    def level_code(self):
        return self.level.value if self.level else None

    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary excluding sensitive data."""
        default_exclude = ['password_hash', 'failed_login_attempts']
        exclude = (exclude or []) + default_exclude
        return super().to_dict(exclude=exclude)

    def __repr__(self) -> str:
        return f'<User {self.email}>'
