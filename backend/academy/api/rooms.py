"""Room Management API."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy import db
from academy.models.room import Room
from academy.utils.decorators import admin_required, login_required
from academy.utils.helpers import error_response, success_response

rooms_bp = Blueprint('rooms', __name__)


def _capacity(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("capacity must be a positive integer")
    return value


@rooms_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Rooms service is running')


@rooms_bp.route('', methods=['GET'])
@jwt_required()
@login_required
def get_rooms(current_user):
    """Get rooms; inactive ones only with ``?include_inactive=true``."""
    query = Room.query
    if request.args.get('include_inactive') != 'true':
        query = query.filter_by(is_active=True)
    rooms = query.order_by(Room.name).all()
    return success_response(data=[room.to_dict() for room in rooms])


@rooms_bp.route('/<int:room_id>', methods=['GET'])
@jwt_required()
@login_required
def get_room(room_id, current_user):
    """Get single room details."""
    room = Room.get_or_404(room_id)
    return success_response(data=room.to_dict())


@rooms_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_room(current_user):
    """Create new room."""
    data = request.get_json(silent=True)
    if not data or not (data.get('name') or '').strip():
        return error_response("Missing required field: name", 400)

    name = data['name'].strip()
    if Room.query.filter_by(name=name).first():
        return error_response(f"Room {name} already exists", 400)

    try:
        room = Room(
            name=name,
            capacity=_capacity(data.get('capacity', 10)),
            description=data.get('description'),
        )
        db.session.add(room)
        db.session.commit()
    except ValueError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Room creation failed")
        return error_response("Error creating room", 500)

    return success_response(
        data=room.to_dict(),
        message="Room created successfully"
    ), 201


@rooms_bp.route('/<int:room_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_room(room_id, current_user):
    """Update room information."""
    room = Room.get_or_404(room_id)
    data = request.get_json(silent=True) or {}

    try:
        if 'name' in data:
            name = (data['name'] or '').strip()
            if not name:
                return error_response("name cannot be empty", 400)
            other = Room.query.filter_by(name=name).first()
            if other and other.id != room.id:
                return error_response(f"Room {name} already exists", 400)
            room.name = name
        if 'capacity' in data:
            room.capacity = _capacity(data['capacity'])
        if 'description' in data:
            room.description = data['description']
        if 'is_active' in data:
            room.is_active = bool(data['is_active'])
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Room update failed for %s", room_id)
        return error_response("Error updating room", 500)

    return success_response(data=room.to_dict(), message="Room updated successfully")


@rooms_bp.route('/<int:room_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_room(room_id, current_user):
    """Deactivate a room; events keep their reference."""
    room = Room.get_or_404(room_id)
    room.is_active = False
    db.session.commit()
    return success_response(message="Room deactivated successfully")
