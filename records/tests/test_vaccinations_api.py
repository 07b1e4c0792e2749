import pytest

from records.models import DewormTreatment, VacTreatment

pytestmark = pytest.mark.django_db


def vaccinations_url(pet, suffix=''):
    return f'/api/admin/clients/{pet.client_id}/pets/{pet.id}/vaccinations{suffix}'


def test_vaccination_round_trip_and_replace(admin_api, pet):
    payload = {'date': '2024-03-11', 'weight': '12.5', 'treatments': [{'treatment': 'Rabies', 'dose': '1ml'}]}
    r = admin_api.post(vaccinations_url(pet), payload, format='json')
    assert r.status_code == 201, r.data
    vac_id = r.data['vaccination']['id']

    got = admin_api.get(vaccinations_url(pet, f'/{vac_id}')).data['vaccination']
    assert [(t['treatment'], t['dose']) for t in got['treatments']] == [('Rabies', '1ml')]
    assert got['weight'] == '12.50'

    replacement = [{'treatment': 'DHPP', 'dose': '1ml'}, {'treatment': 'Leptospirosis', 'dose': '0.5ml'}]
    r = admin_api.put(vaccinations_url(pet, f'/{vac_id}'), {'treatments': replacement}, format='json')
    assert r.status_code == 200, r.data
    assert [(t['treatment'], t['dose']) for t in r.data['vaccination']['treatments']] == [
        ('DHPP', '1ml'), ('Leptospirosis', '0.5ml'),
    ]
    assert list(VacTreatment.objects.filter(vaccination_id=vac_id).values_list('treatment', flat=True)
                .order_by('id')) == ['DHPP', 'Leptospirosis']
    # Visit fields are untouched by a treatments-only update
    assert r.data['vaccination']['date'] == '2024-03-11'


def test_vaccination_requires_at_least_one_treatment(admin_api, pet):
    r = admin_api.post(vaccinations_url(pet), {'date': '2024-03-11', 'treatments': []}, format='json')
    assert r.status_code == 422
    assert 'treatments' in r.data['errors']


def test_replacement_lines_must_be_complete(admin_api, pet):
    r = admin_api.post(vaccinations_url(pet), {'date': '2024-03-11',
                                              'treatments': [{'treatment': 'Rabies', 'dose': '1ml'}]},
                       format='json')
    vac_id = r.data['vaccination']['id']
    r = admin_api.put(vaccinations_url(pet, f'/{vac_id}'), {'treatments': [{'treatment': 'DHPP'}]}, format='json')
    assert r.status_code == 422
    assert VacTreatment.objects.filter(vaccination_id=vac_id).count() == 1


def test_deworming_round_trip(admin_api, owner, pet):
    url = f'/api/admin/clients/{owner.id}/pets/{pet.id}/dewormings'
    payload = {'date': '2024-03-11', 'temperature': '38.4',
               'treatments': [{'treatment': 'Pyrantel'}, {'treatment': 'Praziquantel'}]}
    r = admin_api.post(url, payload, format='json')
    assert r.status_code == 201, r.data
    dew_id = r.data['deworming']['id']
    assert [t['treatment'] for t in admin_api.get(f'{url}/{dew_id}').data['deworming']['treatments']] == [
        'Pyrantel', 'Praziquantel',
    ]

    r = admin_api.delete(f'{url}/{dew_id}')
    assert r.status_code == 200
    assert not DewormTreatment.objects.exists()


def test_vaccination_of_another_pet_is_chain_mismatch(admin_api, pet, other_pet):
    r = admin_api.post(vaccinations_url(other_pet), {'date': '2024-03-11',
                                                    'treatments': [{'treatment': 'Rabies', 'dose': '1ml'}]},
                       format='json')
    vac_id = r.data['vaccination']['id']
    assert admin_api.get(vaccinations_url(pet, f'/{vac_id}')).status_code == 400


def test_owner_lists_own_vaccinations(owner_api, admin_api, pet):
    admin_api.post(vaccinations_url(pet), {'date': '2024-03-11',
                                          'treatments': [{'treatment': 'Rabies', 'dose': '1ml'}]}, format='json')
    r = owner_api.get(f'/api/client/pets/{pet.id}/vaccinations')
    assert r.status_code == 200
    assert r.data['data'][0]['treatments'][0]['treatment'] == 'Rabies'
