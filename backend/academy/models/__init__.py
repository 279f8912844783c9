"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole, CEFRLevel, STAFF_ROLES
from .room import Room
from .availability import AvailabilitySlot
from .schedule import ScheduleEvent, EventType, StudentScheduleAssignment
from .curriculum import (
    ProgramWeek, WeekTopic, StudentProgressWeek, StudentTopicProgress,
    TopicStatus, TopicColor
)
from .gamification import UserPoints, FeatureFlag
from .staff_hours import StaffHours

__all__ = [
    'BaseModel', 'User', 'UserRole', 'CEFRLevel', 'STAFF_ROLES',
    'Room', 'AvailabilitySlot',
    'ScheduleEvent', 'EventType', 'StudentScheduleAssignment',
    'ProgramWeek', 'WeekTopic', 'StudentProgressWeek', 'StudentTopicProgress',
    'TopicStatus', 'TopicColor',
    'UserPoints', 'FeatureFlag', 'StaffHours'
]
