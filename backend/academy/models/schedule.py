"""Weekly recurring schedule events and student assignments."""
import enum

from academy import db
from academy.models.base import BaseModel
from academy.models.user import CEFRLevel


class EventType(enum.Enum):
    """Kinds of events shown on the weekly calendar."""
    CLASS = 'class'
    TUTORING = 'tutoring'
    ACTIVITY = 'activity'
    EXAM = 'exam'
    BREAK = 'break'


class ScheduleEvent(BaseModel):
    """One weekly event on one day (not calendar-dated)."""

    __tablename__ = 'schedule_events'

    # Basic Info
    title = db.Column(db.String(255), nullable=False)
    event_type = db.Column(db.Enum(EventType), nullable=False, default=EventType.CLASS)
    description = db.Column(db.Text, nullable=True)
    level = db.Column(db.Enum(CEFRLevel), nullable=True)
    color = db.Column(db.String(20), nullable=True)
    attachment_url = db.Column(db.String(500), nullable=True)

    # Time Info
    day_of_week = db.Column(db.Integer, nullable=False, index=True)  # 0 = Sunday
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    # Relations (up to two teachers and two tutors)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=True)
    teacher_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    teacher_id_2 = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    tutor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    tutor_id_2 = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    is_active = db.Column(db.Boolean, default=True, nullable=False)

    assignments = db.relationship(
        'StudentScheduleAssignment',
        backref='event',
        lazy='dynamic',
        cascade='all, delete-orphan',
    )

    __table_args__ = (
        db.CheckConstraint('start_time < end_time', name='ck_event_time_order'),
    )

    @property
    def teacher_ids(self):
        return [uid for uid in (self.teacher_id, self.teacher_id_2) if uid]

    @property
    def tutor_ids(self):
        return [uid for uid in (self.tutor_id, self.tutor_id_2) if uid]

    @property
    def staff_ids(self):
        return self.teacher_ids + self.tutor_ids

    def duration_hours(self) -> float:
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return (end - start) / 60

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'event_type': self.event_type.value if self.event_type else None,
            'description': self.description,
            'level': self.level.value if self.level else None,
            'color': self.color,
            'attachment_url': self.attachment_url,
            'day_of_week': self.day_of_week,
            'start_time': self.start_time.strftime('%H:%M') if self.start_time else None,
            'end_time': self.end_time.strftime('%H:%M') if self.end_time else None,
            'room_id': self.room_id,
            'room': self.room.name if self.room else None,
            'teacher_ids': self.teacher_ids,
            'tutor_ids': self.tutor_ids,
            'created_by': self.created_by,
            'is_active': self.is_active,
        }


class StudentScheduleAssignment(BaseModel):
    """Links a student to an event; disabled rather than deleted."""

    __tablename__ = 'student_schedule_assignments'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    schedule_event_id = db.Column(db.Integer, db.ForeignKey('schedule_events.id'), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    student = db.relationship('User', backref=db.backref('schedule_assignments', lazy='dynamic'))

    __table_args__ = (
        db.UniqueConstraint('student_id', 'schedule_event_id', name='uq_student_event'),
    )
