"""Program weeks and topics."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy import db
from academy.models.curriculum import ProgramWeek, WeekTopic
from academy.models.user import CEFRLevel
from academy.utils.decorators import admin_required, login_required
from academy.utils.helpers import error_response, success_response
from academy.utils.validators import ValidationError, require_fields, validate_level

curriculum_bp = Blueprint('curriculum', __name__)


def _week_or_404(week_number):
    week = ProgramWeek.query.filter_by(week_number=week_number).first()
    if week is None:
        return None, error_response(f"Week {week_number} not found", 404)
    return week, None


def _week_number(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("week_number must be a positive integer")
    return value


@curriculum_bp.route('/weeks', methods=['GET'])
@jwt_required()
@login_required
def list_weeks(current_user):
    query = ProgramWeek.query
    if request.args.get('include_inactive') != 'true':
        query = query.filter_by(is_active=True)
    level = request.args.get('level')
    try:
        if level:
            query = query.filter_by(level=CEFRLevel(validate_level(level)))
    except ValidationError as e:
        return error_response(str(e), 400)

    include_topics = request.args.get('include_topics') == 'true'
    weeks = query.order_by(ProgramWeek.week_number).all()
    return success_response(data=[week.to_dict(include_topics=include_topics) for week in weeks])


@curriculum_bp.route('/weeks/<int:week_number>', methods=['GET'])
@jwt_required()
@login_required
def get_week(week_number, current_user):
    week, error = _week_or_404(week_number)
    if error:
        return error
    return success_response(data=week.to_dict(include_topics=True))


@curriculum_bp.route('/weeks', methods=['POST'])
@jwt_required()
@admin_required
def create_week(current_user):
    data = request.get_json(silent=True)
    try:
        require_fields(data, ['week_number', 'level', 'title'])
        number = _week_number(data['week_number'])
        level = validate_level(data['level'], allow_none=False)
    except ValidationError as e:
        return error_response(str(e), 400)

    if ProgramWeek.query.filter_by(week_number=number).first():
        return error_response(f"Week {number} already exists", 400)

    week = ProgramWeek(
        week_number=number,
        level=CEFRLevel(level),
        title=data['title'].strip(),
        description=data.get('description'),
    )
    try:
        week.save()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Week creation failed")
        return error_response("Error creating week", 500)

    return success_response(data=week.to_dict(include_topics=True), message="Week created"), 201


@curriculum_bp.route('/weeks/<int:week_number>', methods=['PUT'])
@jwt_required()
@admin_required
def update_week(week_number, current_user):
    week, error = _week_or_404(week_number)
    if error:
        return error

    data = request.get_json(silent=True) or {}
    try:
        if 'level' in data:
            week.level = CEFRLevel(validate_level(data['level'], allow_none=False))
        if 'title' in data:
            title = (data['title'] or '').strip()
            if not title:
                raise ValidationError("title cannot be empty")
            week.title = title
        if 'description' in data:
            week.description = data['description']
        if 'is_active' in data:
            week.is_active = bool(data['is_active'])
        db.session.commit()
    except ValidationError as e:
        db.session.rollback()
        return error_response(str(e), 400)

    return success_response(data=week.to_dict(include_topics=True), message="Week updated")


@curriculum_bp.route('/weeks/<int:week_number>/topics', methods=['POST'])
@jwt_required()
@admin_required
def create_topic(week_number, current_user):
    week, error = _week_or_404(week_number)
    if error:
        return error

    data = request.get_json(silent=True)
    try:
        require_fields(data, ['name'])
    except ValidationError as e:
        return error_response(str(e), 400)

    order_number = data.get('order_number') or len(week.topics) + 1
    topic = WeekTopic(
        week_id=week.id,
        name=data['name'].strip(),
        description=data.get('description'),
        order_number=order_number,
    )
    topic.save()
    return success_response(data=topic.to_dict(), message="Topic created"), 201


@curriculum_bp.route('/topics/<int:topic_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_topic(topic_id, current_user):
    topic = WeekTopic.get_or_404(topic_id)
    data = request.get_json(silent=True) or {}

    if 'name' in data:
        name = (data['name'] or '').strip()
        if not name:
            return error_response("name cannot be empty", 400)
        topic.name = name
    if 'description' in data:
        topic.description = data['description']
    if 'order_number' in data:
        topic.order_number = data['order_number']
    db.session.commit()

    return success_response(data=topic.to_dict(), message="Topic updated")


@curriculum_bp.route('/topics/<int:topic_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_topic(topic_id, current_user):
    """Delete a topic together with every student's progress on it."""
    topic = WeekTopic.get_or_404(topic_id)
    topic.delete()
    return success_response(message="Topic deleted")
