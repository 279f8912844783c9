"""Student progress through the program weeks."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy.models.curriculum import WeekTopic
from academy.models.gamification import UserPoints
from academy.models.user import User, UserRole
from academy.services.feature_flags import FeatureFlags
from academy.services.progress_service import ProgressService
from academy.utils.decorators import feature_required, login_required, staff_required
from academy.utils.helpers import error_response, success_response
from academy.utils.validators import ValidationError

progress_bp = Blueprint('progress', __name__)


def _service():
    flags = FeatureFlags.load(current_app.config.get('FEATURE_FLAG_DEFAULTS'))
    return ProgressService(flags, current_app.config.get('TOPIC_COLOR_POINTS', 10))


def _student_or_error(student_id, current_user):
    """Students may only read their own record; staff may read anyone's."""
    if current_user.role == UserRole.STUDENT and current_user.id != student_id:
        return None, error_response("Access denied", 403)
    student = User.get_or_404(student_id)
    if student.role != UserRole.STUDENT:
        return None, error_response(f"User {student_id} is not a student", 400)
    return student, None


@progress_bp.route('/me', methods=['GET'])
@jwt_required()
@login_required
def my_progress(current_user):
    if current_user.role != UserRole.STUDENT:
        return error_response("Only students have program progress", 400)
    return success_response(data=_service().overview(current_user))


@progress_bp.route('/students/<int:student_id>', methods=['GET'])
@jwt_required()
@login_required
def student_progress(student_id, current_user):
    student, error = _student_or_error(student_id, current_user)
    if error:
        return error
    return success_response(data=_service().overview(student))


@progress_bp.route('/students/<int:student_id>/weeks/<int:week_number>', methods=['PUT'])
@jwt_required()
@staff_required
def set_week_completion(student_id, week_number, current_user):
    """Mark a week completed or not; ``{"is_completed": bool, "notes"?: str}``."""
    student, error = _student_or_error(student_id, current_user)
    if error:
        return error

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('is_completed'), bool):
        return error_response("is_completed must be true or false", 400)

    try:
        row = _service().set_week_completion(
            student, week_number, data['is_completed'], current_user.id, data.get('notes')
        )
    except LookupError as e:
        return error_response(str(e), 404)
    except Exception:
        current_app.logger.exception("Week completion failed for student %s", student_id)
        return error_response("Error updating week", 500)

    return success_response(data=row.to_dict(), message="Week updated")


@progress_bp.route('/students/<int:student_id>/topics/<int:topic_id>', methods=['PUT'])
@jwt_required()
@staff_required
def update_topic_progress(student_id, topic_id, current_user):
    """Change status and/or color of one topic for one student."""
    student, error = _student_or_error(student_id, current_user)
    if error:
        return error
    topic = WeekTopic.get_or_404(topic_id)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Request body must be a JSON object", 400)

    try:
        result = _service().update_topic(
            student, topic, current_user.id,
            status=data.get('status'),
            color=data.get('color'),
            color_given='color' in data,
        )
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        current_app.logger.exception("Topic update failed for student %s topic %s", student_id, topic_id)
        return error_response("Error updating topic", 500)

    return success_response(data=result, message="Topic updated")


@progress_bp.route('/students/<int:student_id>/points', methods=['GET'])
@jwt_required()
@feature_required('gamification')
@login_required
def student_points(student_id, current_user):
    student, error = _student_or_error(student_id, current_user)
    if error:
        return error

    history = UserPoints.query.filter_by(user_id=student.id).order_by(UserPoints.created_at.desc()).all()
    return success_response(data={
        'student_id': student.id,
        'total_points': UserPoints.total_for(student.id),
        'history': [row.to_dict() for row in history],
    })
