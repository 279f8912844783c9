"""Weekly teaching hours per staff member."""
from academy import db
from academy.models.base import BaseModel


class StaffHours(BaseModel):
    __tablename__ = 'staff_hours'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    calculated_hours = db.Column(db.Float, default=0.0, nullable=False)
    manual_adjustment_hours = db.Column(db.Float, default=0.0, nullable=False)
    total_hours = db.Column(db.Float, default=0.0, nullable=False)
    last_calculated_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship('User', backref=db.backref('staff_hours', uselist=False))

    def refresh_total(self) -> None:
        self.total_hours = (self.calculated_hours or 0.0) + (self.manual_adjustment_hours or 0.0)

    def to_dict(self):
        data = super().to_dict(exclude=['created_at'])
        data['name'] = self.user.name if self.user else None
        data['role'] = self.user.role.value if self.user else None
        return data
