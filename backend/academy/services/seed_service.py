"""Database seeding service for demo data."""
import logging
from datetime import time

from academy import db
from academy.models.curriculum import ProgramWeek, WeekTopic
from academy.models.gamification import FeatureFlag
from academy.models.room import Room
from academy.models.schedule import EventType, ScheduleEvent
from academy.models.user import CEFRLevel, User, UserRole
from academy.services.week_unlock import LEVEL_START_WEEK

logger = logging.getLogger(__name__)

WEEK_THEMES = {
    1: ('Greetings and introductions', ['Alphabet and sounds', 'Saying hello', 'Numbers 0-20']),
    2: ('Everyday routines', ['Present tense regular verbs', 'Telling the time', 'Days of the week']),
    3: ('Food and shopping', ['Ordering at a restaurant', 'Quantities', 'Prices']),
    4: ('Travel and directions', ['Asking for directions', 'Prepositions of place', 'Transport']),
    5: ('Past experiences', ['Simple past', 'Time expressions', 'Storytelling']),
    6: ('Work and studies', ['Job interviews', 'Describing skills', 'Formal emails']),
    7: ('Opinions and debate', ['Giving opinions', 'Agreeing and disagreeing', 'Connectors']),
    8: ('Media and news', ['Reported speech', 'Headlines', 'Summaries']),
    9: ('Culture and society', ['Idioms', 'Register and tone', 'Cultural references']),
    10: ('Academic language', ['Essay structure', 'Hedging', 'Citations']),
    11: ('Advanced nuance', ['Subjunctive nuances', 'Irony and humour', 'Regional variation']),
    12: ('Mastery project', ['Presentation', 'Debate', 'Final review']),
}

REINFORCEMENT_THEMES = {
    101: ('Pronunciation clinic', ['Vowel sounds', 'Stress and rhythm']),
    102: ('Grammar clinic', ['Verb agreement', 'Common mistakes']),
}


class SeedService:
    """Service to seed database with demo data."""

    @staticmethod
    def seed_all():
        """Seed all demo data."""
        SeedService.seed_feature_flags()
        SeedService.seed_rooms()
        SeedService.seed_users()
        SeedService.seed_program()
        SeedService.seed_events()

    @staticmethod
    def seed_feature_flags():
        flags = [
            ('gamification', 'Gamification', 'Points and badges for students', True, 1),
            ('availability_calendar', 'Availability calendar', 'Staff availability editing', True, 1),
        ]
        for key, name, description, enabled, phase in flags:
            if not FeatureFlag.query.filter_by(feature_key=key).first():
                db.session.add(FeatureFlag(
                    feature_key=key, feature_name=name, description=description,
                    is_enabled=enabled, phase=phase
                ))
        db.session.commit()

    @staticmethod
    def seed_rooms():
        for number in range(1, 5):
            name = f"Aula {number}"
            if not Room.query.filter_by(name=name).first():
                db.session.add(Room(name=name, capacity=8 + number * 2))
        db.session.commit()
        logger.info("Rooms: %d", Room.query.count())

    @staticmethod
    def seed_users():
        people = [
            ('admin@academy.test', 'Academy Admin', UserRole.ADMIN, None),
            ('teacher@academy.test', 'Laura Teacher', UserRole.TEACHER, None),
            ('tutor@academy.test', 'Marco Tutor', UserRole.TUTOR, None),
            ('student.a1@academy.test', 'Ana Student', UserRole.STUDENT, CEFRLevel.A1),
            ('student.b1@academy.test', 'Ben Student', UserRole.STUDENT, CEFRLevel.B1),
        ]
        for email, name, role, level in people:
            if User.query.filter_by(email=email).first():
                continue
            user = User(email=email, name=name, role=role, level=level)
            user.set_password('password123')
            db.session.add(user)
        db.session.commit()

    @staticmethod
    def seed_program():
        level_by_week = {}
        for level, start in LEVEL_START_WEEK.items():
            level_by_week[start] = level
            level_by_week[start + 1] = level

        themes = dict(WEEK_THEMES)
        themes.update(REINFORCEMENT_THEMES)
        for number, (title, topics) in themes.items():
            if ProgramWeek.query.filter_by(week_number=number).first():
                continue
            week = ProgramWeek(
                week_number=number,
                level=CEFRLevel(level_by_week.get(number, 'A1')),
                title=title,
            )
            for order, topic in enumerate(topics, start=1):
                week.topics.append(WeekTopic(name=topic, order_number=order))
            db.session.add(week)
        db.session.commit()
        logger.info("Program weeks: %d", ProgramWeek.query.count())

    @staticmethod
    def seed_events():
        if ScheduleEvent.query.count():
            return
        admin = User.query.filter_by(role=UserRole.ADMIN).first()
        teacher = User.query.filter_by(role=UserRole.TEACHER).first()
        tutor = User.query.filter_by(role=UserRole.TUTOR).first()
        room = Room.query.order_by(Room.name).first()

        for day in (1, 3):
            db.session.add(ScheduleEvent(
                title='A1 Group', event_type=EventType.CLASS, level=CEFRLevel.A1,
                day_of_week=day, start_time=time(9, 0), end_time=time(10, 30),
                room_id=room.id, teacher_id=teacher.id, created_by=admin.id,
            ))
        db.session.add(ScheduleEvent(
            title='Conversation tutoring', event_type=EventType.TUTORING,
            day_of_week=2, start_time=time(17, 0), end_time=time(18, 0),
            tutor_id=tutor.id, created_by=admin.id,
        ))
        db.session.commit()
