import re

import pytest

from records.models import Appointment, Consultation, Pet, User

pytestmark = pytest.mark.django_db


def test_create_client_generates_username_and_hides_password(admin_api):
    r = admin_api.post('/api/admin/clients', {'name': 'Ana Reyes', 'email': 'ana.reyes@example.com',
                                              'phone': '0917 555 0101'}, format='json')
    assert r.status_code == 201, r.data
    client = r.data['client']
    assert re.fullmatch(r'ana\.reyes_[0-9a-f]{6}', client['username'])
    assert client['role'] == 'client'
    assert client['pets'] == []
    assert 'password' not in client

    user = User.objects.get(pk=client['id'])
    assert user.has_usable_password()
    assert not user.check_password('')


def test_client_without_email_gets_name_based_username(admin_api):
    r = admin_api.post('/api/admin/clients', {'name': 'Lola Basyang'}, format='json')
    assert r.status_code == 201, r.data
    assert re.fullmatch(r'lola_basyang_[0-9a-f]{6}', r.data['client']['username'])
    assert r.data['client']['email'] is None


def test_duplicate_email_is_rejected(admin_api, owner):
    r = admin_api.post('/api/admin/clients', {'name': 'Copy', 'email': 'MARIA@example.com'}, format='json')
    assert r.status_code == 422
    assert 'email' in r.data['errors']


def test_list_reports_pet_counts(admin_api, owner, other_owner, pet):
    Pet.objects.create(client=owner, name='Tagpi', age=5, species='canine', breed='Aspin', colormark='white')
    r = admin_api.get('/api/admin/clients')
    assert r.status_code == 200
    counts = {c['username']: c['pets_count'] for c in r.data['clients']}
    assert counts == {'maria': 2, 'jose': 0}


def test_get_and_update_client(admin_api, owner, pet):
    r = admin_api.get(f'/api/admin/clients/{owner.id}')
    assert [p['name'] for p in r.data['client']['pets']] == ['Bantay']

    r = admin_api.put(f'/api/admin/clients/{owner.id}', {'phone': '0918 000 1111',
                                                          'email': 'maria@example.com'}, format='json')
    assert r.status_code == 200, r.data
    assert r.data['client']['phone'] == '0918 000 1111'
    assert r.data['client']['name'] == 'Maria Santos'


def test_update_cannot_take_another_clients_username(admin_api, owner, other_owner):
    r = admin_api.patch(f'/api/admin/clients/{owner.id}', {'username': 'jose'}, format='json')
    assert r.status_code == 422
    assert 'username' in r.data['errors']


def test_delete_client_cascades(admin_api, owner, consultation):
    Appointment.objects.create(client=owner, pet=consultation.pet, appointment_date='2024-03-11T07:30:00+08:00',
                               types='consultation')
    r = admin_api.delete(f'/api/admin/clients/{owner.id}')
    assert r.status_code == 200
    assert not Pet.objects.filter(client_id=owner.id).exists()
    assert not Consultation.objects.exists()
    assert not Appointment.objects.exists()
    assert admin_api.get(f'/api/admin/clients/{owner.id}').status_code == 404


def test_staff_accounts_are_not_clients(admin_api, admin_user):
    assert admin_api.get(f'/api/admin/clients/{admin_user.id}').status_code == 404


def test_dashboard_totals(admin_api, pet, other_pet):
    r = admin_api.get('/api/admin/dashboard')
    assert r.status_code == 200
    assert r.data['data'] == {
        'total_clients': 2,
        'total_admins': 1,
        'total_pets': 2,
        'total_canines': 1,
        'total_felines': 1,
        'recent_clients': 2,
        'recent_pets': 2,
    }


def test_clients_cannot_reach_staff_routes(owner_api, owner):
    assert owner_api.get('/api/admin/clients').status_code == 403
    assert owner_api.get(f'/api/admin/clients/{owner.id}').status_code == 403
    assert owner_api.get('/api/admin/dashboard').status_code == 403
