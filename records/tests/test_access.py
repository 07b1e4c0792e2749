import pytest

from records.access import ChainPath, Principal, authorize_chain, authorize_direct, resolve_chain, scope_filter
from records.exceptions import AuthorizationError, ChainMismatchError
from records.models import Consultation, Labtest, Pet, Treatment
from records.services import leaves

pytestmark = pytest.mark.django_db


def test_admin_is_allowed_on_any_owner(admin_user, owner):
    authorize_direct(Principal.from_user(admin_user), owner.id)


def test_client_is_allowed_only_on_own_records(owner, other_owner):
    authorize_direct(Principal.from_user(owner), owner.id)
    with pytest.raises(AuthorizationError):
        authorize_direct(Principal.from_user(owner), other_owner.id)


def test_resolve_chain_of_a_treatment(consultation):
    t = Treatment.objects.create(consultation=consultation, treatment_type='medicine', meds_name='Carprofen')
    assert resolve_chain(t) == ChainPath(
        client_id=consultation.pet.client_id, pet_id=consultation.pet_id, consultation_id=consultation.id)


def test_chain_mismatch_is_reported_after_ownership(admin_user, owner, other_owner, consultation):
    pet = consultation.pet
    sibling = Consultation.objects.create(pet=pet, consultation_date='2024-03-05')
    t = Treatment.objects.create(consultation=consultation, treatment_type='surgery')

    wrong = ChainPath(client_id=owner.id, pet_id=pet.id, consultation_id=sibling.id)
    with pytest.raises(ChainMismatchError):
        authorize_chain(Principal.from_user(admin_user), t, wrong)
    # A stranger is denied before the path is even compared
    with pytest.raises(AuthorizationError):
        authorize_chain(Principal.from_user(other_owner), t, wrong)


def test_matching_chain_returns_actual_path(owner, consultation):
    t = Treatment.objects.create(consultation=consultation, treatment_type='confinement')
    path = ChainPath(client_id=owner.id, pet_id=consultation.pet_id, consultation_id=consultation.id)
    assert authorize_chain(Principal.from_user(owner), t, path) == path


def test_scope_filter_restricts_clients_to_their_pets(admin_user, owner, pet, other_pet, consultation,
                                                      other_consultation):
    Labtest.objects.create(consultation=consultation, lab_types='cbc')
    Labtest.objects.create(consultation=other_consultation, lab_types='xray')

    scope = scope_filter(Principal.from_user(owner))
    assert list(scope.apply(Pet.objects.all(), via='self')) == [pet]
    assert [c.id for c in scope.apply(Consultation.objects.all(), via='pet')] == [consultation.id]
    assert [lt.consultation_id for lt in scope.apply(Labtest.objects.all(), via='consultation')] == [consultation.id]

    everything = scope_filter(Principal.from_user(admin_user))
    assert everything.apply(Labtest.objects.all(), via='consultation').count() == 2


def test_leaf_of_another_client_is_forbidden(owner, other_consultation):
    t = Treatment.objects.create(consultation=other_consultation, treatment_type='medicine')
    with pytest.raises(AuthorizationError):
        leaves.get_leaf(leaves.TREATMENTS, Principal.from_user(owner), t.id)
