"""Weekly schedule API: events, drag-to-create and student assignments."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy import db
from academy.models.schedule import ScheduleEvent
from academy.models.user import UserRole
from academy.services.grid_layout import GridLayout
from academy.services.schedule_service import ScheduleService
from academy.utils.decorators import admin_required, login_required, staff_required
from academy.utils.helpers import dataframe_response, error_response, success_response
from academy.utils.validators import ValidationError

schedules_bp = Blueprint('schedules', __name__)


def _filters():
    return {
        'level': request.args.get('level'),
        'room_id': request.args.get('room_id', type=int),
        'staff_id': request.args.get('staff_id', type=int),
    }


def _can_view(user, event):
    if user.role != UserRole.STUDENT:
        return True
    return event.assignments.filter_by(student_id=user.id, is_active=True).count() > 0


@schedules_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Schedules service is running')


@schedules_bp.route('', methods=['GET'])
@jwt_required()
@login_required
def get_schedules(current_user):
    """Events visible to the caller, ordered by day and start time."""
    try:
        include_all = request.args.get('all') == 'true'
        events = ScheduleService.events_for_user(current_user, include_all, _filters())
        return success_response(data=[event.to_dict() for event in events])
    except ValidationError as e:
        return error_response(str(e), 400)


@schedules_bp.route('/weekly', methods=['GET'])
@jwt_required()
@login_required
def get_weekly(current_user):
    """Events grouped by grid column with their overlay position."""
    try:
        include_all = request.args.get('all') == 'true'
        events = ScheduleService.events_for_user(current_user, include_all, _filters())
        layout = GridLayout.from_config(current_app.config)
        return success_response(data=ScheduleService.weekly_view(events, layout))
    except ValidationError as e:
        return error_response(str(e), 400)


@schedules_bp.route('/export', methods=['GET'])
@jwt_required()
@staff_required
def export_schedules(current_user):
    """Export schedules as CSV or Excel."""
    format_type = request.args.get('format', 'csv')
    if format_type not in ('csv', 'excel'):
        return error_response("format must be csv or excel", 400)

    try:
        events = ScheduleService.events_for_user(current_user, include_all=True, filters=_filters())
        df = ScheduleService.export_dataframe(events)
        return dataframe_response(df, 'schedules_export', format_type, sheet_name='Schedules')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        current_app.logger.exception("Schedule export failed")
        return error_response("Error exporting schedules", 500)


@schedules_bp.route('/<int:event_id>', methods=['GET'])
@jwt_required()
@login_required
def get_schedule(event_id, current_user):
    """Get single event details."""
    event = ScheduleEvent.get_or_404(event_id)
    if not _can_view(current_user, event):
        return error_response("You are not assigned to this event", 403)
    return success_response(data=event.to_dict())


@schedules_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_schedule(current_user):
    """Create one weekly event."""
    try:
        event = ScheduleService.create_event(request.get_json(silent=True), current_user.id)
    except ValidationError as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Event creation failed")
        return error_response("Error creating event", 500)

    return success_response(data=event.to_dict(), message="Event created successfully"), 201


@schedules_bp.route('/quick-create', methods=['POST'])
@jwt_required()
@admin_required
def quick_create(current_user):
    """Create events from a drag rectangle, one per selected day."""
    layout = GridLayout.from_config(current_app.config)
    try:
        events = ScheduleService.quick_create(request.get_json(silent=True), current_user.id, layout)
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        current_app.logger.exception("Quick create failed")
        return error_response("Error creating events", 500)

    return success_response(
        data=[event.to_dict() for event in events],
        message=f"Created {len(events)} events"
    ), 201


@schedules_bp.route('/<int:event_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_schedule(event_id, current_user):
    """Update event fields; omitted fields are left alone."""
    event = ScheduleEvent.get_or_404(event_id)
    try:
        ScheduleService.update_event(event, request.get_json(silent=True))
    except ValidationError as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Event update failed for %s", event_id)
        return error_response("Error updating event", 500)

    return success_response(data=event.to_dict(), message="Event updated successfully")


@schedules_bp.route('/<int:event_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_schedule(event_id, current_user):
    event = ScheduleEvent.get_or_404(event_id)
    try:
        ScheduleService.delete_event(event)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Event delete failed for %s", event_id)
        return error_response("Error deleting event", 500)

    return success_response(message="Event deleted successfully")


@schedules_bp.route('/<int:event_id>/students', methods=['GET'])
@jwt_required()
@staff_required
def get_event_students(event_id, current_user):
    event = ScheduleEvent.get_or_404(event_id)
    assignments = event.assignments.filter_by(is_active=True).all()
    return success_response(data=[
        {
            'student_id': assignment.student_id,
            'name': assignment.student.name,
            'level': assignment.student.level_code,
        }
        for assignment in assignments
    ])


@schedules_bp.route('/<int:event_id>/students', methods=['POST'])
@jwt_required()
@admin_required
def assign_students(event_id, current_user):
    """Assign students to an event; ``{"student_ids": [...]}``."""
    event = ScheduleEvent.get_or_404(event_id)
    data = request.get_json(silent=True) or {}
    try:
        assignments = ScheduleService.assign_students(event, data.get('student_ids'))
    except ValidationError as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Assigning students failed for event %s", event_id)
        return error_response("Error assigning students", 500)

    return success_response(
        data=[assignment.to_dict() for assignment in assignments],
        message=f"Assigned {len(assignments)} students"
    )


@schedules_bp.route('/<int:event_id>/students/<int:student_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def unassign_student(event_id, student_id, current_user):
    """Disable one assignment; the row is kept."""
    event = ScheduleEvent.get_or_404(event_id)
    try:
        ScheduleService.unassign_student(event, student_id)
    except LookupError as e:
        return error_response(str(e), 404)

    return success_response(message="Student removed from event")
