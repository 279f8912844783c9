"""Weekly hours bookkeeping for teachers and tutors."""
import logging
from collections import defaultdict
from typing import Dict, List

import pandas as pd

from academy import db
from academy.models.base import utcnow
from academy.models.schedule import ScheduleEvent
from academy.models.staff_hours import StaffHours
from academy.models.user import User, UserRole

logger = logging.getLogger(__name__)

COUNTED_ROLES = (UserRole.TEACHER, UserRole.TUTOR)


class StaffHoursService:

    @staticmethod
    def scheduled_hours() -> Dict[int, float]:
        """Hours per week each staff member is booked on active events."""
        hours = defaultdict(float)
        for event in ScheduleEvent.query.filter_by(is_active=True).all():
            duration = event.duration_hours()
            for staff_id in set(event.staff_ids):
                hours[staff_id] += duration
        return hours

    @staticmethod
    def _row_for(user_id: int) -> StaffHours:
        row = StaffHours.query.filter_by(user_id=user_id).first()
        if row is None:
            row = StaffHours(user_id=user_id, calculated_hours=0.0, manual_adjustment_hours=0.0)
            db.session.add(row)
        return row

    @staticmethod
    def recalculate() -> List[StaffHours]:
        """Refresh calculated hours for every teacher and tutor."""
        hours = StaffHoursService.scheduled_hours()
        staff = User.query.filter(User.role.in_(COUNTED_ROLES), User.is_active.is_(True)).all()

        rows = []
        now = utcnow()
        for user in staff:
            row = StaffHoursService._row_for(user.id)
            row.calculated_hours = round(hours.get(user.id, 0.0), 2)
            row.last_calculated_at = now
            row.refresh_total()
            rows.append(row)
        db.session.commit()
        logger.info("Recalculated staff hours for %d staff members", len(rows))
        return rows

    @staticmethod
    def set_adjustment(user: User, hours: float) -> StaffHours:
        if user.role not in COUNTED_ROLES:
            raise ValueError(f"{user.email} is not a teacher or tutor")
        row = StaffHoursService._row_for(user.id)
        row.manual_adjustment_hours = float(hours)
        row.refresh_total()
        db.session.commit()
        return row

    @staticmethod
    def get_for(user: User) -> StaffHours:
        row = StaffHours.query.filter_by(user_id=user.id).first()
        if row is None:
            row = StaffHoursService._row_for(user.id)
            row.refresh_total()
            db.session.commit()
        return row

    @staticmethod
    def list_all() -> List[StaffHours]:
        return StaffHours.query.join(User, StaffHours.user_id == User.id).order_by(User.name).all()

    @staticmethod
    def export_dataframe(rows: List[StaffHours]) -> pd.DataFrame:
        data = [{
            'name': row.user.name,
            'email': row.user.email,
            'role': row.user.role.value,
            'calculated_hours': row.calculated_hours,
            'manual_adjustment_hours': row.manual_adjustment_hours,
            'total_hours': row.total_hours,
        } for row in rows]
        columns = ['name', 'email', 'role', 'calculated_hours', 'manual_adjustment_hours', 'total_hours']
        return pd.DataFrame(data, columns=columns)
