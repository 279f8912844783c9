"""Student curriculum progress: week completion, topic status and colors."""
import logging
from typing import Dict, Optional, Set

from academy import db
from academy.models.curriculum import (
    ProgramWeek, StudentProgressWeek, StudentTopicProgress, TopicColor, TopicStatus, WeekTopic
)
from academy.models.gamification import UserPoints
from academy.models.user import User
from academy.services.feature_flags import FeatureFlags
from academy.services.week_unlock import (
    LOCKED, build_week_overview, current_week, is_reinforcement_week, reinforcement_status,
    week_status
)
from academy.utils.validators import ValidationError, validate_choice

logger = logging.getLogger(__name__)

REWARDED_COLORS = {TopicColor.GREEN, TopicColor.PURPLE}

STATUS_VALUES = [status.value for status in TopicStatus]
COLOR_VALUES = [color.value for color in TopicColor]


def earns_color_points(previous: Optional[TopicColor], new: Optional[TopicColor]) -> bool:
    """Points are granted once, on the first move into green or purple."""
    return new in REWARDED_COLORS and previous not in REWARDED_COLORS


class ProgressService:

    def __init__(self, flags: FeatureFlags, color_points: int = 10):
        self.flags = flags
        self.color_points = color_points

    @staticmethod
    def completed_weeks(student_id: int) -> Set[int]:
        rows = StudentProgressWeek.query.filter_by(student_id=student_id, is_completed=True).all()
        return {row.week_number for row in rows}

    @staticmethod
    def regular_week_numbers() -> Set[int]:
        rows = db.session.query(ProgramWeek.week_number).filter(ProgramWeek.is_active.is_(True)).all()
        return {number for (number,) in rows}

    def week_status_for(self, student: User, week_number: int) -> str:
        completed = self.completed_weeks(student.id)
        if is_reinforcement_week(week_number):
            return reinforcement_status(week_number in completed)
        current = current_week(student.level_code, completed, self.regular_week_numbers())
        return week_status(week_number, current, completed)

    def set_week_completion(self, student: User, week_number: int, is_completed: bool,
                            staff_id: int, notes: Optional[str] = None) -> StudentProgressWeek:
        if not ProgramWeek.query.filter_by(week_number=week_number, is_active=True).first():
            raise LookupError(f"Week {week_number} does not exist")

        row = StudentProgressWeek.query.filter_by(student_id=student.id, week_number=week_number).first()
        if row is None:
            row = StudentProgressWeek(student_id=student.id, week_number=week_number)
            db.session.add(row)
        row.mark(bool(is_completed), staff_id)
        if notes is not None:
            row.notes = notes
        db.session.commit()
        logger.info("Week %s for student %s marked completed=%s", week_number, student.id, row.is_completed)
        return row

    def update_topic(self, student: User, topic: WeekTopic, staff_id: int,
                     status: Optional[str] = None, color: Optional[str] = None,
                     color_given: bool = False) -> Dict:
        """Apply a status and/or color change made by staff.

        Staff may set any status from any other; the workflow lives in the UI.

        ``color_given`` distinguishes "clear the color" (``color=None``) from
        "leave the color alone".
        """
        if status is None and not color_given:
            raise ValidationError("Provide status and/or color")

        if self.week_status_for(student, topic.week.week_number) == LOCKED:
            raise ValidationError("Topic belongs to a locked week")

        progress = StudentTopicProgress.query.filter_by(student_id=student.id, topic_id=topic.id).first()
        previous_color = progress.color if progress else None

        target = None
        if status is not None:
            target = TopicStatus(validate_choice(status, STATUS_VALUES, 'status'))
        new_color = None
        if color_given and color is not None:
            new_color = TopicColor(validate_choice(color, COLOR_VALUES, 'color'))

        if progress is None:
            progress = StudentTopicProgress(
                student_id=student.id, topic_id=topic.id, status=TopicStatus.NOT_STARTED
            )
            db.session.add(progress)
        if target is not None:
            progress.status = target

        points_awarded = 0
        if color_given:
            if (earns_color_points(previous_color, new_color)
                    and self.flags.is_enabled('gamification')):
                db.session.add(UserPoints(
                    user_id=student.id,
                    points=self.color_points,
                    reason=f'topic_{new_color.value}',
                    related_id=topic.id,
                ))
                points_awarded = self.color_points
            progress.color = new_color

        progress.updated_by = staff_id
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return {'progress': progress.to_dict(), 'points_awarded': points_awarded}

    def overview(self, student: User) -> Dict:
        weeks = ProgramWeek.query.filter_by(is_active=True).order_by(ProgramWeek.week_number).all()
        completed = self.completed_weeks(student.id)
        progress = {
            row.topic_id: row.to_dict()
            for row in StudentTopicProgress.query.filter_by(student_id=student.id).all()
        }

        result = build_week_overview(
            student.level_code,
            [week.to_dict(include_topics=True) for week in weeks],
            completed,
        )
        for week in result['weeks'] + result['reinforcement_weeks']:
            for topic in week['topics']:
                topic['progress'] = progress.get(topic['id'])
                topic['interactive'] = week['interactive']

        regular_total = len(result['weeks'])
        regular_done = sum(1 for week in result['weeks'] if week['status'] == 'completed')
        result.update({
            'student_id': student.id,
            'level': student.level_code,
            'completed_weeks': regular_done,
            'total_weeks': regular_total,
            'progress_percentage': round(regular_done / regular_total * 100, 1) if regular_total else 0.0,
            'total_points': UserPoints.total_for(student.id),
        })
        return result
