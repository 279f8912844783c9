"""Room model for classes held on site."""
from academy import db
from academy.models.base import BaseModel


class Room(BaseModel):
    """Classroom that schedule events can be held in."""

    __tablename__ = 'rooms'

    name = db.Column(db.String(100), nullable=False, unique=True)
    capacity = db.Column(db.Integer, default=10, nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    events = db.relationship('ScheduleEvent', backref='room', lazy='dynamic')
