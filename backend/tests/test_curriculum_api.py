"""Program weeks and topics administration."""
from academy.models.curriculum import StudentTopicProgress


def test_list_weeks(client, student, auth_headers, program):
    response = client.get('/api/curriculum/weeks?level=A2', headers=auth_headers(student))
    assert response.status_code == 200
    assert [week['week_number'] for week in response.get_json()['data']] == [3, 4]

    week = client.get('/api/curriculum/weeks/101', headers=auth_headers(student)).get_json()['data']
    assert [topic['order_number'] for topic in week['topics']] == [1, 2]
    assert client.get('/api/curriculum/weeks/55', headers=auth_headers(student)).status_code == 404


def test_create_week_and_topics(client, admin, auth_headers):
    headers = auth_headers(admin)
    response = client.post('/api/curriculum/weeks', headers=headers,
                           json={'week_number': 1, 'level': 'a1', 'title': 'Greetings'})
    assert response.status_code == 201
    assert response.get_json()['data']['level'] == 'A1'

    assert client.post('/api/curriculum/weeks', headers=headers,
                       json={'week_number': 1, 'level': 'A1', 'title': 'Again'}).status_code == 400
    assert client.post('/api/curriculum/weeks', headers=headers,
                       json={'week_number': 2, 'level': None, 'title': 'No level'}).status_code == 400

    client.post('/api/curriculum/weeks/1/topics', headers=headers, json={'name': 'Alphabet'})
    response = client.post('/api/curriculum/weeks/1/topics', headers=headers, json={'name': 'Numbers'})
    assert response.status_code == 201
    assert response.get_json()['data']['order_number'] == 2


def test_update_week(client, admin, auth_headers, program):
    response = client.put('/api/curriculum/weeks/2', headers=auth_headers(admin),
                          json={'title': 'Routines', 'is_active': False})
    assert response.status_code == 200
    weeks = client.get('/api/curriculum/weeks', headers=auth_headers(admin)).get_json()['data']
    assert 2 not in [week['week_number'] for week in weeks]


def test_delete_topic_removes_progress(client, admin, teacher, student, auth_headers, program):
    topic = program[1].topics[0]
    client.put(f'/api/progress/students/{student.id}/topics/{topic.id}', headers=auth_headers(teacher),
               json={'status': 'in_progress'})
    assert StudentTopicProgress.query.count() == 1

    assert client.delete(f'/api/curriculum/topics/{topic.id}', headers=auth_headers(admin)).status_code == 200
    assert StudentTopicProgress.query.count() == 0


def test_only_admin_edits_program(client, teacher, auth_headers, program):
    assert client.post('/api/curriculum/weeks', headers=auth_headers(teacher),
                       json={'week_number': 20, 'level': 'A1', 'title': 'X'}).status_code == 403
