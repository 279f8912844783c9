"""Weekly hours of teachers and tutors."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy import db
from academy.models.user import User, UserRole
from academy.services.staff_hours_service import StaffHoursService
from academy.utils.decorators import admin_required, roles_required
from academy.utils.helpers import dataframe_response, error_response, success_response

staff_hours_bp = Blueprint('staff_hours', __name__)


@staff_hours_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def list_staff_hours(current_user):
    return success_response(data=[row.to_dict() for row in StaffHoursService.list_all()])


@staff_hours_bp.route('/me', methods=['GET'])
@jwt_required()
@roles_required(UserRole.TEACHER, UserRole.TUTOR)
def my_hours(current_user):
    return success_response(data=StaffHoursService.get_for(current_user).to_dict())


@staff_hours_bp.route('/recalculate', methods=['POST'])
@jwt_required()
@admin_required
def recalculate(current_user):
    """Recompute calculated hours from the active schedule."""
    try:
        rows = StaffHoursService.recalculate()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Staff hours recalculation failed")
        return error_response("Error recalculating hours", 500)

    return success_response(
        data=[row.to_dict() for row in rows],
        message=f"Recalculated hours for {len(rows)} staff members"
    )


@staff_hours_bp.route('/<int:user_id>/adjustment', methods=['PUT'])
@jwt_required()
@admin_required
def set_adjustment(user_id, current_user):
    """Set the manual adjustment; ``{"hours": number}``, may be negative."""
    user = User.get_or_404(user_id)
    data = request.get_json(silent=True) or {}
    hours = data.get('hours')
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        return error_response("hours must be a number", 400)

    try:
        row = StaffHoursService.set_adjustment(user, hours)
    except ValueError as e:
        return error_response(str(e), 400)

    return success_response(data=row.to_dict(), message="Adjustment saved")


@staff_hours_bp.route('/export', methods=['GET'])
@jwt_required()
@admin_required
def export_staff_hours(current_user):
    format_type = request.args.get('format', 'csv')
    if format_type not in ('csv', 'excel'):
        return error_response("format must be csv or excel", 400)

    df = StaffHoursService.export_dataframe(StaffHoursService.list_all())
    return dataframe_response(df, 'staff_hours', format_type, sheet_name='Staff Hours')
