import pytest

from records.models import Consultation, Labtest, Prescription, Treatment

pytestmark = pytest.mark.django_db


def url(consultation, suffix=''):
    pet = consultation.pet
    return f'/api/admin/clients/{pet.client_id}/pets/{pet.id}/consultations/{consultation.id}{suffix}'


def test_create_consultation_embeds_pet_and_client(admin_api, owner, pet):
    payload = {'consultation_date': '2024-03-11', 'weight': '10.25', 'temperature': '38.9', 'complaint': 'Vomiting'}
    r = admin_api.post(f'/api/admin/clients/{owner.id}/pets/{pet.id}/consultations', payload, format='json')
    assert r.status_code == 201, r.data
    c = r.data['consultation']
    assert c['weight'] == '10.25'
    assert c['temperature'] == '38.90'
    assert c['pet']['id'] == pet.id
    assert c['pet']['client']['username'] == 'maria'


def test_out_of_range_vitals_are_rejected(admin_api, owner, pet):
    payload = {'consultation_date': '2024-03-11', 'weight': '1000', 'temperature': '100'}
    r = admin_api.post(f'/api/admin/clients/{owner.id}/pets/{pet.id}/consultations', payload, format='json')
    assert r.status_code == 422
    assert set(r.data['errors']) == {'weight', 'temperature'}


def test_partial_update_changes_only_supplied_fields(admin_api, consultation):
    r = admin_api.put(url(consultation), {'diagnosis': 'x'}, format='json')
    assert r.status_code == 200, r.data

    consultation.refresh_from_db()
    assert consultation.diagnosis == 'x'
    assert str(consultation.weight) == '12.50'
    assert str(consultation.temperature) == '38.50'
    assert consultation.complaint == 'Limping'
    assert consultation.consultation_date.isoformat() == '2024-03-01'


def test_consultation_under_wrong_pet_is_chain_mismatch(admin_api, consultation, other_pet):
    r = admin_api.get(f'/api/admin/clients/{other_pet.client_id}/pets/{other_pet.id}/consultations/{consultation.id}')
    assert r.status_code == 400
    assert 'consultation' not in r.data


def test_latest_returns_five_most_recent_of_each_kind(admin_api, consultation):
    for n in range(6):
        Labtest.objects.create(consultation=consultation, lab_types='cbc', notes=f'run {n}')
        Treatment.objects.create(consultation=consultation, treatment_type='medicine', meds_name=f'dose {n}')
    Prescription.objects.create(consultation=consultation, description='Rest')

    r = admin_api.get(url(consultation, '/latest'))
    assert r.status_code == 200
    data = r.data['consultation']
    assert len(data['labtests']) == 5
    assert data['labtests'][0]['notes'] == 'run 5'
    assert len(data['treatments']) == 5
    assert [p['description'] for p in data['prescriptions']] == ['Rest']


def test_delete_removes_consultation_records(admin_api, consultation):
    Labtest.objects.create(consultation=consultation, lab_types='xray')
    r = admin_api.delete(url(consultation))
    assert r.status_code == 200
    assert not Consultation.objects.exists()
    assert not Labtest.objects.exists()
