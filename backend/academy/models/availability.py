"""Staff availability stored as one row per contiguous range per day."""
from academy import db
from academy.models.base import BaseModel
from academy.services.slot_merger import TimeRange


class AvailabilitySlot(BaseModel):
    __tablename__ = 'availability_slots'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    day_of_week = db.Column(db.Integer, nullable=False)  # 0 = Sunday
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    user = db.relationship('User', backref=db.backref('availability_slots', lazy='dynamic'))

    __table_args__ = (
        db.CheckConstraint('start_time < end_time', name='ck_availability_time_order'),
    )

    def to_range(self) -> TimeRange:
        return TimeRange(self.day_of_week, self.start_time, self.end_time)

    def to_dict(self):
        data = self.to_range().to_dict()
        data['id'] = self.id
        return data
