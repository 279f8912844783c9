"""Schedule event management service."""
import logging
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy import or_

from academy import db
from academy.models.room import Room
from academy.models.schedule import EventType, ScheduleEvent, StudentScheduleAssignment
from academy.models.user import CEFRLevel, User, UserRole
from academy.services.grid_layout import GridLayout
from academy.utils.time_utils import to_minutes, to_time
from academy.utils.validators import (
    ValidationError, require_fields, validate_cell, validate_choice,
    validate_day_of_week, validate_level
)

logger = logging.getLogger(__name__)

EVENT_TYPES = [event_type.value for event_type in EventType]
MAX_TEACHERS = 2
MAX_TUTORS = 2


def _staff_ids(data: Dict, plural: str, singular: str, role: UserRole, limit: int) -> List[int]:
    if plural in data:
        ids = data[plural] or []
    else:
        ids = [uid for uid in (data.get(singular), data.get(f'{singular}_2')) if uid]
    if not isinstance(ids, list):
        raise ValidationError(f"{plural} must be a list")
    if len(ids) > limit:
        raise ValidationError(f"At most {limit} {plural.replace('_ids', 's')} per event")
    if len(set(ids)) != len(ids):
        raise ValidationError(f"Duplicate entries in {plural}")

    for uid in ids:
        user = db.session.get(User, uid)
        if not user or not user.is_active or user.role != role:
            raise ValidationError(f"User {uid} is not an active {role.value}")
    return ids


class ScheduleService:
    """Service for weekly schedule events."""

    @staticmethod
    def build_event_fields(data: Dict, existing: Optional[ScheduleEvent] = None) -> Dict:
        """Validate a create/update payload into model column values."""
        if existing is None:
            require_fields(data, ['title', 'day_of_week', 'start_time', 'end_time'])
        elif not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        fields = {}
        if 'title' in data:
            title = (data['title'] or '').strip()
            if not title:
                raise ValidationError("title is required")
            fields['title'] = title
        if 'event_type' in data or existing is None:
            event_type = validate_choice(data.get('event_type', 'class'), EVENT_TYPES, 'event_type')
            fields['event_type'] = EventType(event_type)
        if 'day_of_week' in data:
            fields['day_of_week'] = validate_day_of_week(data['day_of_week'])

        start = data.get('start_time', existing.start_time if existing else None)
        end = data.get('end_time', existing.end_time if existing else None)
        if 'start_time' in data or 'end_time' in data:
            if to_minutes(start) >= to_minutes(end):
                raise ValidationError("End time must be after start time")
            fields['start_time'] = to_time(start)
            fields['end_time'] = to_time(end)

        if 'level' in data:
            level = validate_level(data['level'])
            fields['level'] = CEFRLevel(level) if level else None
        if 'room_id' in data:
            room_id = data['room_id']
            if room_id in (None, '', 'none'):
                fields['room_id'] = None
            else:
                room = db.session.get(Room, room_id)
                if not room or not room.is_active:
                    raise ValidationError("Invalid or inactive room")
                fields['room_id'] = room.id

        if any(key in data for key in ('teacher_ids', 'teacher_id', 'teacher_id_2')):
            teacher_ids = _staff_ids(data, 'teacher_ids', 'teacher_id', UserRole.TEACHER, MAX_TEACHERS)
            fields['teacher_id'] = teacher_ids[0] if teacher_ids else None
            fields['teacher_id_2'] = teacher_ids[1] if len(teacher_ids) > 1 else None
        if any(key in data for key in ('tutor_ids', 'tutor_id', 'tutor_id_2')):
            tutor_ids = _staff_ids(data, 'tutor_ids', 'tutor_id', UserRole.TUTOR, MAX_TUTORS)
            fields['tutor_id'] = tutor_ids[0] if tutor_ids else None
            fields['tutor_id_2'] = tutor_ids[1] if len(tutor_ids) > 1 else None

        for key in ('description', 'color', 'attachment_url'):
            if key in data:
                fields[key] = data[key] or None
        if 'is_active' in data:
            fields['is_active'] = bool(data['is_active'])
        return fields

    @staticmethod
    def create_event(data: Dict, created_by: int) -> ScheduleEvent:
        fields = ScheduleService.build_event_fields(data)
        event = ScheduleEvent(created_by=created_by, **fields)
        db.session.add(event)
        db.session.commit()
        logger.info("Created schedule event %s (%s)", event.id, event.title)
        return event

    @staticmethod
    def update_event(event: ScheduleEvent, data: Dict) -> ScheduleEvent:
        fields = ScheduleService.build_event_fields(data, existing=event)
        for key, value in fields.items():
            setattr(event, key, value)
        db.session.commit()
        return event

    @staticmethod
    def delete_event(event: ScheduleEvent) -> None:
        # dynamic relationships only cascade pending rows
        for assignment in event.assignments.all():
            db.session.delete(assignment)
        db.session.delete(event)
        db.session.commit()
        logger.info("Deleted schedule event %s", event.id)

    @staticmethod
    def quick_create(data: Dict, created_by: int, layout: GridLayout) -> List[ScheduleEvent]:
        """Create one event per day of a drag selection, all or nothing."""
        require_fields(data, ['anchor', 'cursor', 'title'])
        anchor = validate_cell(data['anchor'])
        cursor = validate_cell(data['cursor'])
        selection = layout.selection_bounds(anchor, cursor)

        events = []
        try:
            for day in selection.days:
                payload = dict(data)
                payload.pop('anchor')
                payload.pop('cursor')
                payload.update({
                    'day_of_week': day,
                    'start_time': selection.start_time,
                    'end_time': selection.end_time,
                })
                fields = ScheduleService.build_event_fields(payload)
                event = ScheduleEvent(created_by=created_by, **fields)
                db.session.add(event)
                events.append(event)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            "Quick-created %d events %s-%s on days %s",
            len(events), selection.start_time, selection.end_time, list(selection.days)
        )
        return events

    @staticmethod
    def events_for_user(user: User, include_all: bool = False, filters: Optional[Dict] = None):
        query = ScheduleEvent.query.filter_by(is_active=True)

        if user.role == UserRole.STUDENT:
            query = query.join(StudentScheduleAssignment).filter(
                StudentScheduleAssignment.student_id == user.id,
                StudentScheduleAssignment.is_active.is_(True),
            )
        elif user.role in (UserRole.TEACHER, UserRole.TUTOR) and not include_all:
            query = query.filter(or_(
                ScheduleEvent.teacher_id == user.id,
                ScheduleEvent.teacher_id_2 == user.id,
                ScheduleEvent.tutor_id == user.id,
                ScheduleEvent.tutor_id_2 == user.id,
            ))

        filters = filters or {}
        if filters.get('level'):
            query = query.filter(ScheduleEvent.level == CEFRLevel(validate_level(filters['level'])))
        if filters.get('room_id'):
            query = query.filter(ScheduleEvent.room_id == filters['room_id'])
        if filters.get('staff_id'):
            staff_id = filters['staff_id']
            query = query.filter(or_(
                ScheduleEvent.teacher_id == staff_id,
                ScheduleEvent.teacher_id_2 == staff_id,
                ScheduleEvent.tutor_id == staff_id,
                ScheduleEvent.tutor_id_2 == staff_id,
            ))

        return query.order_by(ScheduleEvent.day_of_week, ScheduleEvent.start_time).all()

    @staticmethod
    def weekly_view(events: List[ScheduleEvent], layout: GridLayout) -> Dict:
        """Events grouped by visible day, each with its overlay position."""
        by_day = {day: [] for day in layout.visible_days()}
        hidden = 0
        for event in events:
            if event.day_of_week not in by_day:
                hidden += 1
                continue
            data = event.to_dict()
            data['layout'] = layout.place(data)
            by_day[event.day_of_week].append(data)

        return {
            'days': [{'day_of_week': day, 'events': by_day[day]} for day in layout.visible_days()],
            'hidden_events': hidden,
            'grid': {
                'start_hour': layout.grid_start_hour,
                'end_hour': layout.grid_end_hour,
                'slot_minutes': layout.slot_minutes,
                'pixels_per_slot': layout.pixels_per_slot,
                'total_height': layout.total_height(),
            },
        }

    @staticmethod
    def assign_students(event: ScheduleEvent, student_ids: List[int]) -> List[StudentScheduleAssignment]:
        """Activate assignments, reusing disabled rows."""
        if not isinstance(student_ids, list) or not student_ids:
            raise ValidationError("student_ids must be a non-empty list")

        assignments = []
        for student_id in student_ids:
            student = db.session.get(User, student_id)
            if not student or student.role != UserRole.STUDENT:
                raise ValidationError(f"User {student_id} is not a student")
            assignment = StudentScheduleAssignment.query.filter_by(
                student_id=student_id, schedule_event_id=event.id
            ).first()
            if assignment is None:
                assignment = StudentScheduleAssignment(student_id=student_id, schedule_event_id=event.id)
                db.session.add(assignment)
            assignment.is_active = True
            assignments.append(assignment)

        db.session.commit()
        return assignments

    @staticmethod
    def unassign_student(event: ScheduleEvent, student_id: int) -> StudentScheduleAssignment:
        assignment = StudentScheduleAssignment.query.filter_by(
            student_id=student_id, schedule_event_id=event.id
        ).first()
        if assignment is None:
            raise LookupError(f"Student {student_id} is not assigned to event {event.id}")
        assignment.is_active = False
        db.session.commit()
        return assignment

    @staticmethod
    def export_dataframe(events: List[ScheduleEvent]) -> pd.DataFrame:
        users = {}

        def name_of(user_id):
            if user_id not in users:
                user = db.session.get(User, user_id)
                users[user_id] = user.name if user else ''
            return users[user_id]

        rows = []
        for event in events:
            rows.append({
                'title': event.title,
                'event_type': event.event_type.value,
                'day_of_week': event.day_of_week,
                'start_time': event.start_time.strftime('%H:%M'),
                'end_time': event.end_time.strftime('%H:%M'),
                'level': event.level.value if event.level else '',
                'room': event.room.name if event.room else '',
                'teachers': ', '.join(name_of(uid) for uid in event.teacher_ids),
                'tutors': ', '.join(name_of(uid) for uid in event.tutor_ids),
                'students': event.assignments.filter_by(is_active=True).count(),
            })
        columns = ['title', 'event_type', 'day_of_week', 'start_time', 'end_time',
                   'level', 'room', 'teachers', 'tutors', 'students']
        return pd.DataFrame(rows, columns=columns)
