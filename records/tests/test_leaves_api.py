import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from records.models import Consultation, Labtest, Prescription, Treatment

pytestmark = pytest.mark.django_db

# Smallest valid GIF
GIF_BYTES = (
    b'GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00'
    b',\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;'
)


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


def base(consultation):
    pet = consultation.pet
    return f'/api/admin/clients/{pet.client_id}/pets/{pet.id}/consultations/{consultation.id}'


def test_treatment_requested_through_the_wrong_consultation_is_rejected(admin_api, consultation):
    sibling = Consultation.objects.create(pet=consultation.pet, consultation_date='2024-03-09')
    t = Treatment.objects.create(consultation=consultation, treatment_type='medicine', meds_name='Metronidazole')

    r = admin_api.get(f'{base(sibling)}/treatments/{t.id}')
    assert r.status_code == 400
    assert 'treatment' not in r.data
    assert r.data['success'] is False

    assert admin_api.get(f'{base(consultation)}/treatments/{t.id}').data['treatment']['meds_name'] == 'Metronidazole'


def test_missing_leaf_is_404(admin_api, consultation):
    assert admin_api.get(f'{base(consultation)}/labtests/424242').status_code == 404


def test_create_treatment_and_list_by_consultation(admin_api, consultation, other_consultation):
    r = admin_api.post(f'{base(consultation)}/treatments',
                       {'treatment_type': 'surgery', 'treatment_details': 'Spay'}, format='json')
    assert r.status_code == 201, r.data
    assert r.data['treatment']['consultation']['pet']['client']['username'] == 'maria'
    Treatment.objects.create(consultation=other_consultation, treatment_type='medicine')

    listed = admin_api.get(f'/api/treatments?consultation_id={consultation.id}').data['treatments']
    assert [t['treatment_details'] for t in listed] == ['Spay']
    assert len(admin_api.get('/api/treatments').data['treatments']) == 2


def test_invalid_lab_type_is_422(admin_api, consultation):
    r = admin_api.post(f'{base(consultation)}/labtests', {'lab_types': 'mri'}, format='json')
    assert r.status_code == 422
    assert 'lab_types' in r.data['errors']


def test_prescription_needs_photo_or_description(admin_api, consultation):
    r = admin_api.post(f'{base(consultation)}/prescriptions', {}, format='json')
    assert r.status_code == 422
    assert 'upload_photo' in r.data['errors']
    assert not Prescription.objects.exists()


def test_prescription_photos_are_stored_as_a_list_of_paths(admin_api, consultation, media_root):
    photos = [
        SimpleUploadedFile('rx1.gif', GIF_BYTES, content_type='image/gif'),
        SimpleUploadedFile('rx2.gif', GIF_BYTES, content_type='image/gif'),
    ]
    r = admin_api.post(f'{base(consultation)}/prescriptions', {'upload_photo': photos}, format='multipart')
    assert r.status_code == 201, r.data
    paths = r.data['prescription']['upload_photo']
    assert len(paths) == 2
    assert all(p.startswith('prescriptions/') and p.endswith('.gif') for p in paths)
    assert all(default_storage.exists(p) for p in paths)
    assert Prescription.objects.get().upload_photo == paths


def test_upload_replaces_photo_list_on_update(admin_api, consultation, media_root):
    lt = Labtest.objects.create(consultation=consultation, lab_types='xray', photo_result=['labtests/old.gif'])
    new = SimpleUploadedFile('film.gif', GIF_BYTES, content_type='image/gif')
    r = admin_api.put(f'{base(consultation)}/labtests/{lt.id}', {'photo_result': [new]}, format='multipart')
    assert r.status_code == 200, r.data
    lt.refresh_from_db()
    assert len(lt.photo_result) == 1
    assert lt.photo_result[0] != 'labtests/old.gif'
    assert lt.lab_types == 'xray'


def test_non_image_upload_is_rejected(admin_api, consultation, media_root):
    doc = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
    r = admin_api.post(f'{base(consultation)}/prescriptions', {'upload_photo': [doc]}, format='multipart')
    assert r.status_code == 422
    assert 'upload_photo' in r.data['errors']


def test_oversized_upload_is_rejected(admin_api, consultation, media_root, settings):
    settings.UPLOAD_MAX_MB = 0
    r = admin_api.post(f'{base(consultation)}/prescriptions',
                       {'upload_photo': [SimpleUploadedFile('big.gif', GIF_BYTES, content_type='image/gif')]},
                       format='multipart')
    assert r.status_code == 422
