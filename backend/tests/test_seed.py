"""Demo data seeding."""
from academy.models.curriculum import ProgramWeek
from academy.models.schedule import ScheduleEvent
from academy.models.user import User


def test_seed_db_command_is_idempotent(app):
    runner = app.test_cli_runner()
    assert runner.invoke(args=['seed-db']).exit_code == 0
    assert runner.invoke(args=['seed-db']).exit_code == 0

    assert ProgramWeek.query.count() == 14
    assert ProgramWeek.query.filter_by(week_number=5).one().level.value == 'B1'
    assert ProgramWeek.query.filter(ProgramWeek.week_number >= 100).count() == 2
    assert User.query.filter_by(email='admin@academy.test').count() == 1
    assert ScheduleEvent.query.count() == 3


def test_seeded_admin_can_log_in(app, client):
    app.test_cli_runner().invoke(args=['seed-db'])
    response = client.post('/api/auth/login', json={
        'email': 'admin@academy.test', 'password': 'password123'
    })
    assert response.status_code == 200
