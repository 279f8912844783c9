"""Feature flag lookup and administration."""
from academy.models.gamification import FeatureFlag
from academy.services.feature_flags import FeatureFlags


def test_lookup_defaults_and_unknown_keys():
    flags = FeatureFlags({'chat': True}, defaults={'gamification': True})
    assert flags.is_enabled('chat')
    assert flags.is_enabled('gamification')
    assert not flags.is_enabled('video_calls')


def test_stored_rows_override_defaults(app):
    FeatureFlag(feature_key='gamification', feature_name='Gamification', is_enabled=False).save()
    flags = FeatureFlags.load({'gamification': True})
    assert not flags.is_enabled('gamification')


def test_list_and_toggle(client, admin, teacher, auth_headers):
    response = client.put('/api/feature-flags/availability_calendar', headers=auth_headers(admin),
                          json={'is_enabled': True, 'description': 'Staff availability'})
    assert response.status_code == 200
    assert response.get_json()['data']['feature_name'] == 'Availability Calendar'

    data = client.get('/api/feature-flags', headers=auth_headers(teacher)).get_json()['data']
    assert data['effective'] == {'gamification': True, 'availability_calendar': True}
    assert len(data['flags']) == 1


def test_toggle_validation(client, admin, teacher, auth_headers):
    assert client.put('/api/feature-flags/gamification', headers=auth_headers(admin),
                      json={'is_enabled': 'no'}).status_code == 400
    assert client.put('/api/feature-flags/gamification', headers=auth_headers(teacher),
                      json={'is_enabled': False}).status_code == 403
