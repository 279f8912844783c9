"""Program progress, topic workflow and color points."""
from academy.models.gamification import UserPoints


def _topic_url(student, topic):
    return f'/api/progress/students/{student.id}/topics/{topic.id}'


def test_overview_for_new_student(client, student, auth_headers, program):
    response = client.get('/api/progress/me', headers=auth_headers(student))
    assert response.status_code == 200

    data = response.get_json()['data']
    assert data['current_week'] == 1
    assert data['total_weeks'] == 12
    assert data['progress_percentage'] == 0.0
    statuses = {week['week_number']: week['status'] for week in data['weeks']}
    assert statuses[1] == 'current'
    assert statuses[2] == 'locked'
    assert data['reinforcement_weeks'][0]['week_number'] == 101
    assert data['reinforcement_weeks'][0]['status'] == 'available'
    assert data['weeks'][1]['topics'][0]['interactive'] is False


def test_level_sets_entry_week(client, make_user, auth_headers, program):
    b1 = make_user('student', level='B1')
    data = client.get('/api/progress/me', headers=auth_headers(b1)).get_json()['data']
    assert data['current_week'] == 5


def test_student_without_level_has_nothing_unlocked(client, make_user, auth_headers, program):
    unplaced = make_user('student')
    data = client.get('/api/progress/me', headers=auth_headers(unplaced)).get_json()['data']
    assert data['current_week'] == 0
    assert all(week['status'] == 'locked' for week in data['weeks'])


def test_completing_a_week_moves_current(client, student, teacher, auth_headers, program):
    response = client.put(f'/api/progress/students/{student.id}/weeks/1', headers=auth_headers(teacher),
                          json={'is_completed': True, 'notes': 'Good start'})
    assert response.status_code == 200
    assert response.get_json()['data']['completed_by'] == teacher.id

    data = client.get(f'/api/progress/students/{student.id}', headers=auth_headers(teacher)).get_json()['data']
    assert data['current_week'] == 2
    assert data['completed_weeks'] == 1

    client.put(f'/api/progress/students/{student.id}/weeks/1', headers=auth_headers(teacher),
               json={'is_completed': False})
    data = client.get(f'/api/progress/students/{student.id}', headers=auth_headers(teacher)).get_json()['data']
    assert data['current_week'] == 1


def test_week_completion_validation(client, student, teacher, auth_headers, program):
    headers = auth_headers(teacher)
    url = f'/api/progress/students/{student.id}/weeks'
    assert client.put(f'{url}/50', headers=headers, json={'is_completed': True}).status_code == 404
    assert client.put(f'{url}/1', headers=headers, json={'is_completed': 'yes'}).status_code == 400
    assert client.put(f'{url}/1', headers=auth_headers(student), json={'is_completed': True}).status_code == 403


def test_topic_workflow(client, student, teacher, auth_headers, program):
    headers = auth_headers(teacher)
    url = _topic_url(student, program[1].topics[0])

    assert client.put(url, headers=headers, json={'status': 'in_progress'}).status_code == 200
    assert client.put(url, headers=headers, json={'status': 'in_progress'}).status_code == 200
    assert client.put(url, headers=headers, json={'status': 'needs_review'}).status_code == 200
    response = client.put(url, headers=headers, json={'status': 'completed'})
    assert response.status_code == 200
    assert response.get_json()['data']['progress']['status'] == 'completed'
    assert client.put(url, headers=headers, json={'status': 'needs_review'}).status_code == 200
    response = client.put(url, headers=headers, json={'status': 'not_started'})
    assert response.status_code == 200
    assert response.get_json()['data']['progress']['status'] == 'not_started'


def test_new_topic_can_be_marked_directly(client, student, teacher, auth_headers, program):
    headers = auth_headers(teacher)

    response = client.put(_topic_url(student, program[1].topics[0]), headers=headers,
                          json={'status': 'completed'})
    assert response.status_code == 200
    assert response.get_json()['data']['progress']['status'] == 'completed'

    response = client.put(_topic_url(student, program[1].topics[1]), headers=headers,
                          json={'status': 'needs_review'})
    assert response.status_code == 200
    assert response.get_json()['data']['progress']['status'] == 'needs_review'


def test_topic_update_validation(client, student, teacher, auth_headers, program):
    headers = auth_headers(teacher)
    url = _topic_url(student, program[1].topics[0])
    assert client.put(url, headers=headers, json={}).status_code == 400
    assert client.put(url, headers=headers, json={'status': 'done'}).status_code == 400
    assert client.put(url, headers=headers, json={'color': 'pink'}).status_code == 400
    assert client.put(f'/api/progress/students/{student.id}/topics/999', headers=headers,
                      json={'status': 'in_progress'}).status_code == 404


def test_locked_week_topics_cannot_change(client, student, teacher, auth_headers, program):
    url = _topic_url(student, program[3].topics[0])
    response = client.put(url, headers=auth_headers(teacher), json={'status': 'in_progress'})
    assert response.status_code == 400


def test_reinforcement_topics_are_always_open(client, student, teacher, auth_headers, program):
    url = _topic_url(student, program[101].topics[0])
    response = client.put(url, headers=auth_headers(teacher), json={'status': 'in_progress'})
    assert response.status_code == 200


def test_color_points_awarded_once(client, student, teacher, auth_headers, program):
    headers = auth_headers(teacher)
    url = _topic_url(student, program[1].topics[0])

    awarded = []
    for color in ['green', 'green', 'purple', 'yellow', None, 'purple']:
        response = client.put(url, headers=headers, json={'color': color})
        assert response.status_code == 200
        awarded.append(response.get_json()['data']['points_awarded'])

    assert awarded == [10, 0, 0, 0, 0, 10]
    assert UserPoints.total_for(student.id) == 20

    points = client.get(f'/api/progress/students/{student.id}/points', headers=auth_headers(student))
    assert points.get_json()['data']['total_points'] == 20
    assert points.get_json()['data']['history'][0]['reason'] == 'topic_purple'


def test_color_does_not_change_status(client, student, teacher, auth_headers, program):
    url = _topic_url(student, program[1].topics[0])
    response = client.put(url, headers=auth_headers(teacher), json={'color': 'orange'})
    progress = response.get_json()['data']['progress']
    assert progress['status'] == 'not_started'
    assert progress['color'] == 'orange'


def test_no_points_when_gamification_disabled(client, admin, student, teacher, auth_headers, program):
    response = client.put('/api/feature-flags/gamification', headers=auth_headers(admin),
                          json={'is_enabled': False})
    assert response.status_code == 200

    url = _topic_url(student, program[1].topics[0])
    response = client.put(url, headers=auth_headers(teacher), json={'color': 'green'})
    assert response.get_json()['data']['points_awarded'] == 0
    assert UserPoints.total_for(student.id) == 0

    points = client.get(f'/api/progress/students/{student.id}/points', headers=auth_headers(student))
    assert points.status_code == 403


def test_students_only_read_their_own_progress(client, student, make_user, auth_headers, program):
    other = make_user('student', level='A1')
    assert client.get(f'/api/progress/students/{other.id}', headers=auth_headers(student)).status_code == 403
    assert client.get(f'/api/progress/students/{student.id}', headers=auth_headers(student)).status_code == 200


def test_weeks_before_entry_week_stay_editable(client, make_user, teacher, auth_headers, program):
    a2 = make_user('student', level='A2')
    data = client.get(f'/api/progress/students/{a2.id}', headers=auth_headers(teacher)).get_json()['data']
    statuses = {week['week_number']: week['status'] for week in data['weeks']}
    assert data['current_week'] == 3
    assert statuses[1] == 'completed'
    assert statuses[2] == 'completed'
    assert statuses[4] == 'locked'

    response = client.put(_topic_url(a2, program[2].topics[0]), headers=auth_headers(teacher),
                          json={'status': 'needs_review'})
    assert response.status_code == 200


def test_inactive_week_cannot_be_completed(client, admin, student, teacher, auth_headers, program):
    response = client.put('/api/curriculum/weeks/2', headers=auth_headers(admin), json={'is_active': False})
    assert response.status_code == 200

    response = client.put(f'/api/progress/students/{student.id}/weeks/2', headers=auth_headers(teacher),
                          json={'is_completed': True})
    assert response.status_code == 404
