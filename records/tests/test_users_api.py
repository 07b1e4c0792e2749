import pytest

pytestmark = pytest.mark.django_db


def test_profile_round_trip(owner_api):
    r = owner_api.get('/api/user/profile')
    assert r.status_code == 200
    assert r.data['data']['username'] == 'maria'

    r = owner_api.put('/api/user/profile', {'phone': '0917 111 2222', 'address': 'Quezon City'}, format='json')
    assert r.status_code == 200, r.data
    assert r.data['data']['phone'] == '0917 111 2222'
    assert r.data['data']['address'] == 'Quezon City'


def test_role_is_not_writable(owner_api, owner):
    r = owner_api.put('/api/user/profile', {'role': 'admin', 'name': 'Maria S.'}, format='json')
    assert r.status_code == 200
    owner.refresh_from_db()
    assert owner.role == 'client'
    assert owner.name == 'Maria S.'


def test_profile_password_change_needs_current_password(owner_api, owner):
    payload = {'password': 'n3w-Secret!', 'password_confirmation': 'n3w-Secret!'}
    r = owner_api.put('/api/user/profile', payload, format='json')
    assert r.status_code == 422
    assert 'current_password' in r.data['errors']

    r = owner_api.put('/api/user/profile', {**payload, 'current_password': 'wrong-one'}, format='json')
    assert r.status_code == 422
    assert 'current_password' in r.data['errors']

    r = owner_api.put('/api/user/profile', {**payload, 'current_password': 'P@ssw0rd1'}, format='json')
    assert r.status_code == 200
    owner.refresh_from_db()
    assert owner.check_password('n3w-Secret!')


def test_password_endpoint(owner_api, owner):
    r = owner_api.put('/api/user/password', {'current_password': 'nope', 'password': 'n3w-Secret!',
                                             'password_confirmation': 'n3w-Secret!'}, format='json')
    assert r.status_code == 422

    r = owner_api.put('/api/user/password', {'current_password': 'P@ssw0rd1', 'password': 'n3w-Secret!',
                                             'password_confirmation': 'different'}, format='json')
    assert r.status_code == 422
    assert 'password' in r.data['errors']

    r = owner_api.put('/api/user/password', {'current_password': 'P@ssw0rd1', 'password': 'n3w-Secret!',
                                             'password_confirmation': 'n3w-Secret!'}, format='json')
    assert r.status_code == 200
    owner.refresh_from_db()
    assert owner.check_password('n3w-Secret!')


def test_username_and_email_must_be_unique(owner_api, other_owner):
    # Keeping one's own username or e-mail is not a conflict
    assert owner_api.put('/api/user/username', {'username': 'maria'}, format='json').status_code == 200
    assert owner_api.put('/api/user/email', {'email': 'maria@example.com'}, format='json').status_code == 200

    r = owner_api.put('/api/user/username', {'username': 'jose'}, format='json')
    assert r.status_code == 422
    assert 'username' in r.data['errors']
    r = owner_api.put('/api/user/email', {'email': 'jose@example.com'}, format='json')
    assert r.status_code == 422

    r = owner_api.put('/api/user/username', {'username': 'maria.santos'}, format='json')
    assert r.data['data']['username'] == 'maria.santos'


def test_user_pets_lists_only_own(owner_api, pet, other_pet):
    r = owner_api.get('/api/user/pets')
    assert r.status_code == 200
    assert [p['name'] for p in r.data['data']] == ['Bantay']


def test_staff_profile_is_self_service_too(admin_api):
    r = admin_api.get('/api/user/profile')
    assert r.data['data']['role'] == 'admin'
