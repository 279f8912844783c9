"""Staff availability endpoints."""
from unittest import mock

from academy.models.availability import AvailabilitySlot


def _cells(*pairs):
    return [{'day': day, 'hour': hour} for day, hour in pairs]


def test_save_merges_cells_into_ranges(client, teacher, auth_headers):
    response = client.put('/api/availability', headers=auth_headers(teacher), json={
        'slots': _cells((1, 9), (1, 10), (1, 11), (1, 14), (3, 8))
    })
    assert response.status_code == 200

    ranges = response.get_json()['data']['ranges']
    assert ranges == [
        {'day_of_week': 1, 'start_time': '09:00', 'end_time': '12:00'},
        {'day_of_week': 1, 'start_time': '14:00', 'end_time': '15:00'},
        {'day_of_week': 3, 'start_time': '08:00', 'end_time': '09:00'},
    ]
    assert AvailabilitySlot.query.filter_by(user_id=teacher.id).count() == 3


def test_save_replaces_previous_rows(client, tutor, auth_headers):
    headers = auth_headers(tutor)
    client.put('/api/availability', headers=headers, json={'slots': _cells((1, 9), (2, 9))})
    client.put('/api/availability', headers=headers, json={'slots': _cells((5, 17))})

    response = client.get('/api/availability', headers=headers)
    data = response.get_json()['data']
    assert data['slots'] == [{'day': 5, 'hour': 17}]
    assert len(data['ranges']) == 1


def test_failed_save_keeps_previous_rows(client, teacher, auth_headers):
    headers = auth_headers(teacher)
    client.put('/api/availability', headers=headers, json={'slots': _cells((1, 9))})

    with mock.patch('academy.services.availability_service.to_time',
                    side_effect=RuntimeError('database unavailable')):
        response = client.put('/api/availability', headers=headers, json={'slots': _cells((2, 10))})
    assert response.status_code == 500

    rows = AvailabilitySlot.query.filter_by(user_id=teacher.id).all()
    assert [(row.day_of_week, row.to_range().start_time) for row in rows] == [(1, '09:00')]


def test_hours_outside_grid_are_rejected(client, teacher, auth_headers):
    response = client.put('/api/availability', headers=auth_headers(teacher), json={
        'slots': _cells((1, 21))
    })
    assert response.status_code == 400


def test_invalid_payloads(client, teacher, auth_headers):
    headers = auth_headers(teacher)
    assert client.put('/api/availability', headers=headers, json={}).status_code == 400
    assert client.put('/api/availability', headers=headers,
                      json={'slots': [{'day': 9, 'hour': 10}]}).status_code == 400
    assert client.put('/api/availability', headers=headers,
                      json={'slots': [{'day': 1}]}).status_code == 400


def test_add_range_merges_with_existing(client, teacher, auth_headers):
    headers = auth_headers(teacher)
    client.put('/api/availability', headers=headers, json={'slots': _cells((2, 9), (2, 10))})

    response = client.post('/api/availability/ranges', headers=headers, json={
        'day_of_week': 2, 'start_time': '11:00', 'end_time': '13:00'
    })
    assert response.status_code == 201
    assert response.get_json()['data']['ranges'] == [
        {'day_of_week': 2, 'start_time': '09:00', 'end_time': '13:00'}
    ]


def test_add_range_validation(client, teacher, auth_headers):
    headers = auth_headers(teacher)
    assert client.post('/api/availability/ranges', headers=headers, json={
        'day_of_week': 2, 'start_time': '13:00', 'end_time': '11:00'
    }).status_code == 400
    assert client.post('/api/availability/ranges', headers=headers, json={
        'day_of_week': 2, 'start_time': '10:15', 'end_time': '10:45'
    }).status_code == 400
    assert client.post('/api/availability/ranges', headers=headers, json={
        'day_of_week': 2, 'start_time': '1pm', 'end_time': '14:00'
    }).status_code == 400


def test_clear(client, teacher, auth_headers):
    headers = auth_headers(teacher)
    client.put('/api/availability', headers=headers, json={'slots': _cells((1, 9))})
    assert client.delete('/api/availability', headers=headers).status_code == 200
    assert AvailabilitySlot.query.filter_by(user_id=teacher.id).count() == 0


def test_staff_can_read_colleagues(client, teacher, tutor, student, auth_headers):
    client.put('/api/availability', headers=auth_headers(tutor), json={'slots': _cells((4, 15))})

    response = client.get(f'/api/availability/{tutor.id}', headers=auth_headers(teacher))
    assert response.status_code == 200
    assert response.get_json()['data']['slots'] == [{'day': 4, 'hour': 15}]

    assert client.get(f'/api/availability/{student.id}', headers=auth_headers(teacher)).status_code == 400


def test_students_have_no_availability(client, student, auth_headers):
    assert client.get('/api/availability', headers=auth_headers(student)).status_code == 403


def test_full_day_is_stored_as_one_row(client, teacher, auth_headers):
    response = client.put('/api/availability', headers=auth_headers(teacher), json={
        'slots': _cells(*[(2, hour) for hour in range(7, 21)])
    })
    assert response.status_code == 200
    assert response.get_json()['data']['ranges'] == [
        {'day_of_week': 2, 'start_time': '07:00', 'end_time': '21:00'}
    ]
    assert AvailabilitySlot.query.filter_by(user_id=teacher.id).count() == 1
