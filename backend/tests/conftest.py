"""Shared fixtures."""
import itertools

import pytest
from flask_jwt_extended import create_access_token

from academy import create_app, db
from academy.models.curriculum import ProgramWeek, WeekTopic
from academy.models.room import Room
from academy.models.user import CEFRLevel, User, UserRole

_counter = itertools.count(1)


@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory for users of any role."""
    def _make(role='student', level=None, name=None, email=None, password='password123'):
        number = next(_counter)
        user = User(
            email=email or f'{role}{number}@academy.test',
            name=name or f'{role.title()} {number}',
            role=UserRole(role),
            level=CEFRLevel(level) if level else None,
        )
        user.set_password(password)
        return user.save()
    return _make


@pytest.fixture
def auth_headers(app):
    """Authorization header for a user."""
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def admin(make_user):
    return make_user('admin')


@pytest.fixture
def teacher(make_user):
    return make_user('teacher')


@pytest.fixture
def tutor(make_user):
    return make_user('tutor')


@pytest.fixture
def student(make_user):
    return make_user('student', level='A1')


@pytest.fixture
def room(app):
    return Room(name='Aula 1', capacity=12).save()


@pytest.fixture
def program(app):
    """Weeks 1-12 (two per level) with two topics each, plus reinforcement week 101."""
    levels = ['A1', 'A1', 'A2', 'A2', 'B1', 'B1', 'B2', 'B2', 'C1', 'C1', 'C2', 'C2']
    weeks = {}
    for number in list(range(1, 13)) + [101]:
        level = levels[number - 1] if number <= 12 else 'A1'
        week = ProgramWeek(week_number=number, level=CEFRLevel(level), title=f'Week {number}')
        week.topics.append(WeekTopic(name=f'Topic {number}.1', order_number=1))
        week.topics.append(WeekTopic(name=f'Topic {number}.2', order_number=2))
        db.session.add(week)
        weeks[number] = week
    db.session.commit()
    return weeks
