from __future__ import annotations

import logging

from ..access import ChainPath, Principal, authorize_chain, authorize_direct, scope_filter
from ..models import Pet
from .clients import client_summary, load_client
from .common import assign, fetch

logger = logging.getLogger(__name__)

PET_FIELDS = ('name', 'age', 'species', 'breed', 'colormark')


def pet_summary(pet) -> dict:
    return {
        'id': pet.id,
        'name': pet.name,
        'species': pet.species,
        'breed': pet.breed,
        'client': client_summary(pet.client),
    }


def serialize_pet(pet, include_client: bool = True) -> dict:
    data = {
        'id': pet.id,
        'client_id': pet.client_id,
        'name': pet.name,
        'age': pet.age,
        'species': pet.species,
        'breed': pet.breed,
        'colormark': pet.colormark,
        'created_at': pet.created_at.isoformat() if pet.created_at else None,
        'updated_at': pet.updated_at.isoformat() if pet.updated_at else None,
    }
    if include_client:
        data['client'] = client_summary(pet.client)
    return data


def load_pet(pet_id):
    return fetch(Pet.objects.select_related('client'), pet_id, 'Pet')


def list_pets(principal: Principal, client_id=None) -> list[dict]:
    """Pets of one client, or every pet the caller may see."""
    qs = Pet.objects.select_related('client')
    if client_id is not None:
        client = load_client(client_id)
        authorize_direct(principal, client.id)
        qs = qs.filter(client=client)
    else:
        qs = scope_filter(principal).apply(qs, via='self')
    return [serialize_pet(p) for p in qs]


def create_pet(principal: Principal, client_id, data: dict) -> dict:
    client = load_client(client_id)
    authorize_direct(principal, client.id)
    pet = Pet(client=client)
    assign(pet, data, PET_FIELDS)
    pet.save()
    logger.info('pet %s created for client %s by %s', pet.id, client.id, principal.id)
    return serialize_pet(pet)


def get_pet_record(principal: Principal, pet_id, client_id=None) -> Pet:
    pet = load_pet(pet_id)
    authorize_chain(principal, pet, ChainPath(client_id=client_id))
    return pet


def get_pet(principal: Principal, pet_id, client_id=None) -> dict:
    return serialize_pet(get_pet_record(principal, pet_id, client_id))


def get_pet_history(principal: Principal, pet_id, client_id=None) -> dict:
    """A pet with its consultations (and their records), vaccinations and dewormings."""
    from .consultations import serialize_consultation
    from .leaves import LABTESTS, PRESCRIPTIONS, TREATMENTS, serialize_leaf
    from .preventive import DEWORMINGS, VACCINATIONS, serialize_visit

    pet = get_pet_record(principal, pet_id, client_id)
    consultations = []
    for c in pet.consultations.prefetch_related('labtests', 'treatments', 'prescriptions'):
        item = serialize_consultation(c, include_pet=False)
        item['labtests'] = [serialize_leaf(LABTESTS, x, include_parent=False) for x in c.labtests.all()]
        item['treatments'] = [serialize_leaf(TREATMENTS, x, include_parent=False) for x in c.treatments.all()]
        item['prescriptions'] = [serialize_leaf(PRESCRIPTIONS, x, include_parent=False)
                                 for x in c.prescriptions.all()]
        consultations.append(item)
    data = serialize_pet(pet)
    data['consultations'] = consultations
    data['vaccinations'] = [serialize_visit(VACCINATIONS, v, include_pet=False)
                            for v in pet.vaccinations.prefetch_related('treatments')]
    data['dewormings'] = [serialize_visit(DEWORMINGS, d, include_pet=False)
                          for d in pet.dewormings.prefetch_related('treatments')]
    return data


def update_pet(principal: Principal, pet_id, data: dict, client_id=None) -> dict:
    pet = get_pet_record(principal, pet_id, client_id)
    changed = assign(pet, data, PET_FIELDS)
    if changed:
        pet.save(update_fields=changed + ['updated_at'])
        logger.info('pet %s updated by %s: %s', pet.id, principal.id, ', '.join(changed))
    return serialize_pet(pet)


def delete_pet(principal: Principal, pet_id, client_id=None) -> None:
    pet = get_pet_record(principal, pet_id, client_id)
    pet.delete()
    logger.info('pet %s deleted by %s', pet_id, principal.id)
