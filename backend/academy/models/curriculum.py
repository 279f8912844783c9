"""Curriculum content and per-student progress."""
import enum

from academy import db
from academy.models.base import BaseModel, utcnow
from academy.models.user import CEFRLevel


class TopicStatus(enum.Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    NEEDS_REVIEW = 'needs_review'
    COMPLETED = 'completed'


class TopicColor(enum.Enum):
    """Evaluation tag layered on top of the status."""
    GREEN = 'green'
    YELLOW = 'yellow'
    ORANGE = 'orange'
    BLUE = 'blue'
    PURPLE = 'purple'
    RED = 'red'


class ProgramWeek(BaseModel):
    """A week of the program; numbers >= 100 are reinforcement weeks."""

    __tablename__ = 'program_weeks'

    week_number = db.Column(db.Integer, nullable=False, unique=True, index=True)
    level = db.Column(db.Enum(CEFRLevel), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    topics = db.relationship(
        'WeekTopic',
        backref='week',
        order_by='WeekTopic.order_number',
        cascade='all, delete-orphan',
    )

    def to_dict(self, include_topics: bool = False):
        data = {
            'id': self.id,
            'week_number': self.week_number,
            'level': self.level.value if self.level else None,
            'title': self.title,
            'description': self.description,
            'is_active': self.is_active,
        }
        if include_topics:
            data['topics'] = [topic.to_dict() for topic in self.topics]
        return data


class WeekTopic(BaseModel):
    __tablename__ = 'week_topics'

    week_id = db.Column(db.Integer, db.ForeignKey('program_weeks.id'), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    order_number = db.Column(db.Integer, nullable=False, default=1)

    def to_dict(self):
        return {
            'id': self.id,
            'week_id': self.week_id,
            'name': self.name,
            'description': self.description,
            'order_number': self.order_number,
        }


class StudentProgressWeek(BaseModel):
    """Completion flag of one program week for one student."""

    __tablename__ = 'student_progress_weeks'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)
    is_completed = db.Column(db.Boolean, default=False, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)
    completed_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint('student_id', 'week_number', name='uq_student_week'),
    )

    def mark(self, is_completed: bool, staff_id: int) -> None:
        self.is_completed = is_completed
        self.completed_at = utcnow() if is_completed else None
        self.completed_by = staff_id if is_completed else None


class StudentTopicProgress(BaseModel):
    """Created lazily on the first status or color change."""

    __tablename__ = 'student_topic_progress'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    topic_id = db.Column(db.Integer, db.ForeignKey('week_topics.id'), nullable=False)
    status = db.Column(db.Enum(TopicStatus), nullable=False, default=TopicStatus.NOT_STARTED)
    color = db.Column(db.Enum(TopicColor), nullable=True)
    updated_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    topic = db.relationship('WeekTopic', backref=db.backref('progress', cascade='all, delete-orphan'))

    __table_args__ = (
        db.UniqueConstraint('student_id', 'topic_id', name='uq_student_topic'),
    )

    def to_dict(self):
        return {
            'student_id': self.student_id,
            'topic_id': self.topic_id,
            'status': self.status.value,
            'color': self.color.value if self.color else None,
            'updated_by': self.updated_by,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
