"""Staff availability calendar API."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy.models.user import User
from academy.services.availability_service import AvailabilityService
from academy.services.slot_merger import TimeRange
from academy.utils.decorators import staff_required
from academy.utils.helpers import error_response, success_response
from academy.utils.validators import ValidationError, validate_cell

availability_bp = Blueprint('availability', __name__)


def _service():
    return AvailabilityService.from_config(current_app.config)


def _payload(service, user_id):
    ranges = service.get_ranges(user_id)
    cells = sorted(service.get_selection(user_id))
    return {
        'user_id': user_id,
        'ranges': [time_range.to_dict() for time_range in ranges],
        'slots': [{'day': day, 'hour': hour} for day, hour in cells],
        'grid': {'start_hour': service.start_hour, 'end_hour': service.end_hour},
    }


@availability_bp.route('', methods=['GET'])
@jwt_required()
@staff_required
def get_own_availability(current_user):
    """Stored ranges of the caller plus the expanded cell selection."""
    return success_response(data=_payload(_service(), current_user.id))


@availability_bp.route('/<int:user_id>', methods=['GET'])
@jwt_required()
@staff_required
def get_user_availability(user_id, current_user):
    user = User.get_or_404(user_id)
    if not user.is_staff():
        return error_response("Only staff members keep availability", 400)
    return success_response(data=_payload(_service(), user.id))


@availability_bp.route('', methods=['PUT'])
@jwt_required()
@staff_required
def save_availability(current_user):
    """Replace the caller's availability with the posted cell selection."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('slots'), list):
        return error_response("slots must be a list of {day, hour} cells", 400)

    service = _service()
    try:
        cells = [validate_cell(cell) for cell in data['slots']]
        ranges = service.replace(current_user.id, cells)
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        current_app.logger.exception("Saving availability failed for user %s", current_user.id)
        return error_response("Error saving availability", 500)

    return success_response(
        data=_payload(service, current_user.id),
        message=f"Saved {len(ranges)} availability ranges"
    )


@availability_bp.route('/ranges', methods=['POST'])
@jwt_required()
@staff_required
def add_range(current_user):
    """Add a typed-in range on top of the stored availability."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Request body must be a JSON object", 400)

    service = _service()
    try:
        time_range = TimeRange.from_dict(data)
        service.add_range(current_user.id, time_range)
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        current_app.logger.exception("Adding availability range failed for user %s", current_user.id)
        return error_response("Error saving availability", 500)

    return success_response(data=_payload(service, current_user.id), message="Range added"), 201


@availability_bp.route('', methods=['DELETE'])
@jwt_required()
@staff_required
def clear_availability(current_user):
    try:
        _service().clear(current_user.id)
    except Exception:
        current_app.logger.exception("Clearing availability failed for user %s", current_user.id)
        return error_response("Error clearing availability", 500)
    return success_response(message="Availability cleared")
