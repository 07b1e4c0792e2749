from __future__ import annotations

import logging

from ..access import ChainPath, Principal, authorize_chain, scope_filter
from ..models import Consultation
from .common import assign, decimal_str, fetch
from .pets import get_pet_record, pet_summary

logger = logging.getLogger(__name__)

CONSULTATION_FIELDS = ('consultation_date', 'weight', 'temperature', 'complaint', 'diagnosis')
LATEST_LIMIT = 5


def consultation_summary(c) -> dict:
    return {
        'id': c.id,
        'consultation_date': c.consultation_date.isoformat(),
        'pet': pet_summary(c.pet),
    }


def serialize_consultation(c, include_pet: bool = True) -> dict:
    data = {
        'id': c.id,
        'pet_id': c.pet_id,
        'consultation_date': c.consultation_date.isoformat(),
        'weight': decimal_str(c.weight),
        'temperature': decimal_str(c.temperature),
        'complaint': c.complaint,
        'diagnosis': c.diagnosis,
        'created_at': c.created_at.isoformat() if c.created_at else None,
        'updated_at': c.updated_at.isoformat() if c.updated_at else None,
    }
    if include_pet:
        data['pet'] = pet_summary(c.pet)
    return data


def load_consultation(consultation_id):
    return fetch(Consultation.objects.select_related('pet__client'), consultation_id, 'Consultation')


def list_consultations(principal: Principal, pet_id=None, client_id=None) -> list[dict]:
    qs = Consultation.objects.select_related('pet__client')
    if pet_id is not None:
        pet = get_pet_record(principal, pet_id, client_id)
        qs = qs.filter(pet=pet)
    else:
        qs = scope_filter(principal).apply(qs, via='pet')
    return [serialize_consultation(c) for c in qs]


def create_consultation(principal: Principal, pet_id, data: dict, client_id=None) -> dict:
    pet = get_pet_record(principal, pet_id, client_id)
    c = Consultation(pet=pet)
    assign(c, data, CONSULTATION_FIELDS)
    c.save()
    logger.info('consultation %s created for pet %s by %s', c.id, pet.id, principal.id)
    return serialize_consultation(c)


def get_consultation_record(principal: Principal, consultation_id, pet_id=None, client_id=None) -> Consultation:
    c = load_consultation(consultation_id)
    authorize_chain(principal, c, ChainPath(client_id=client_id, pet_id=pet_id))
    return c


def get_consultation(principal: Principal, consultation_id, pet_id=None, client_id=None) -> dict:
    return serialize_consultation(get_consultation_record(principal, consultation_id, pet_id, client_id))


def latest_records(principal: Principal, consultation_id, pet_id=None, client_id=None) -> dict:
    """The consultation with its most recent lab tests, treatments and prescriptions."""
    from .leaves import LABTESTS, PRESCRIPTIONS, TREATMENTS, serialize_leaf

    c = get_consultation_record(principal, consultation_id, pet_id, client_id)
    data = serialize_consultation(c)
    for kind in (LABTESTS, TREATMENTS, PRESCRIPTIONS):
        rows = kind.model.objects.filter(consultation=c).order_by('-created_at', '-id')[:LATEST_LIMIT]
        data[kind.plural] = [serialize_leaf(kind, r, include_parent=False) for r in rows]
    return data


def update_consultation(principal: Principal, consultation_id, data: dict, pet_id=None, client_id=None) -> dict:
    c = get_consultation_record(principal, consultation_id, pet_id, client_id)
    changed = assign(c, data, CONSULTATION_FIELDS)
    if changed:
        c.save(update_fields=changed + ['updated_at'])
        logger.info('consultation %s updated by %s: %s', c.id, principal.id, ', '.join(changed))
    return serialize_consultation(c)


def delete_consultation(principal: Principal, consultation_id, pet_id=None, client_id=None) -> None:
    c = get_consultation_record(principal, consultation_id, pet_id, client_id)
    c.delete()
    logger.info('consultation %s deleted by %s', consultation_id, principal.id)
