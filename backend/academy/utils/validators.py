"""Validation utilities for the application."""
import re
from typing import Any, Dict, Iterable, List, Optional

CEFR_LEVELS = ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')


class ValidationError(Exception):
    """Raised when request data or a stored row fails validation."""
    pass


class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))

    @staticmethod
    def validate_password(password: str) -> Dict[str, Any]:
        """Validate password strength."""
        errors = []

        if not password:
            errors.append("Password is required")
        elif len(password) < 6:
            errors.append("Password must be at least 6 characters long")
        elif len(password) > 128:
            errors.append("Password is too long")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_name(name: str) -> Dict[str, Any]:
        """Validate user name."""
        errors = []

        if not name or not name.strip():
            errors.append("Name is required")
        elif len(name.strip()) < 2:
            errors.append("Name must be at least 2 characters long")
        elif len(name.strip()) > 100:
            errors.append("Name is too long")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            if field not in data or data[field] is None or data[field] == '':
                errors.append(f"{field} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }


def require_fields(data: Optional[Dict], required_fields: Iterable[str]) -> Dict:
    """Raise ValidationError unless every required field is present."""
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    result = Validator.validate_required_fields(data, list(required_fields))
    if not result['is_valid']:
        raise ValidationError(', '.join(result['errors']))
    return data


def validate_day_of_week(value: Any) -> int:
    """Day of week as stored: 0 = Sunday ... 6 = Saturday."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"day_of_week must be an integer, got {value!r}")
    if not 0 <= value <= 6:
        raise ValidationError(f"day_of_week must be between 0 and 6, got {value}")
    return value


def validate_hour(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"hour must be an integer, got {value!r}")
    if not 0 <= value <= 23:
        raise ValidationError(f"hour must be between 0 and 23, got {value}")
    return value


def validate_level(value: Any, allow_none: bool = True) -> Optional[str]:
    """Normalize a CEFR level tag (A1-C2)."""
    if value is None or value == '' or value == 'none':
        if allow_none:
            return None
        raise ValidationError("level is required")
    level = str(value).strip().upper()
    if level not in CEFR_LEVELS:
        raise ValidationError(f"Invalid level: {value}")
    return level


def validate_choice(value: Any, choices: Iterable[str], field: str) -> str:
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(f"Invalid {field}: {value!r} (expected one of {', '.join(choices)})")
    return value


def validate_cell(cell: Any) -> tuple:
    """Accept a grid cell as {'day': d, 'hour': h} or [d, h]."""
    if isinstance(cell, dict):
        if 'day' not in cell or 'hour' not in cell:
            raise ValidationError("Each cell needs 'day' and 'hour'")
        day, hour = cell['day'], cell['hour']
    elif isinstance(cell, (list, tuple)) and len(cell) == 2:
        day, hour = cell
    else:
        raise ValidationError(f"Invalid cell: {cell!r}")
    return validate_day_of_week(day), validate_hour(hour)
