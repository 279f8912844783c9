"""Point grants and feature flags."""
from academy import db
from academy.models.base import BaseModel


class UserPoints(BaseModel):
    """One point grant; a user's score is the sum of their rows."""

    __tablename__ = 'user_points'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    points = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.String(100), nullable=False)
    related_id = db.Column(db.Integer, nullable=True)

    @classmethod
    def total_for(cls, user_id: int) -> int:
        total = db.session.query(db.func.coalesce(db.func.sum(cls.points), 0)).filter(
            cls.user_id == user_id
        ).scalar()
        return int(total)


class FeatureFlag(BaseModel):
    __tablename__ = 'feature_flags'

    feature_key = db.Column(db.String(100), nullable=False, unique=True, index=True)
    feature_name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_enabled = db.Column(db.Boolean, default=False, nullable=False)
    phase = db.Column(db.Integer, default=1, nullable=False)
