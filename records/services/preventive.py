"""
Vaccinations and dewormings.

Both are visits filed directly under a pet and own one or more treatment
lines.  Updating a visit with a ``treatments`` array replaces every line
inside a single transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from ..access import ChainPath, Principal, authorize_chain, scope_filter
from ..models import DewormTreatment, Deworming, VacTreatment, Vaccination
from .common import assign, decimal_str, fetch
from .pets import get_pet_record, pet_summary

logger = logging.getLogger(__name__)

VISIT_FIELDS = ('date', 'weight', 'temperature')


@dataclass(frozen=True)
class VisitKind:
    model: type
    line_model: type
    parent_field: str
    label: str
    singular: str
    line_fields: tuple


VACCINATIONS = VisitKind(Vaccination, VacTreatment, 'vaccination', 'Vaccination', 'vaccination',
                         ('treatment', 'dose'))
DEWORMINGS = VisitKind(Deworming, DewormTreatment, 'deworming', 'Deworming', 'deworming', ('treatment',))


def serialize_visit(kind: VisitKind, visit, include_pet: bool = True) -> dict:
    data = {
        'id': visit.id,
        'pet_id': visit.pet_id,
        'date': visit.date.isoformat(),
        'weight': decimal_str(visit.weight),
        'temperature': decimal_str(visit.temperature),
        'treatments': [
            {'id': line.id, **{f: getattr(line, f) for f in kind.line_fields}}
            for line in visit.treatments.all()
        ],
        'created_at': visit.created_at.isoformat() if visit.created_at else None,
        'updated_at': visit.updated_at.isoformat() if visit.updated_at else None,
    }
    if include_pet:
        data['pet'] = pet_summary(visit.pet)
    return data


def _queryset(kind: VisitKind):
    return kind.model.objects.select_related('pet__client').prefetch_related('treatments')


def _insert_lines(kind: VisitKind, visit, lines) -> None:
    kind.line_model.objects.bulk_create([
        kind.line_model(**{kind.parent_field: visit}, **{f: line[f] for f in kind.line_fields})
        for line in lines
    ])


def list_visits(kind: VisitKind, principal: Principal, pet_id=None, client_id=None) -> list[dict]:
    qs = _queryset(kind)
    if pet_id is not None:
        pet = get_pet_record(principal, pet_id, client_id)
        qs = qs.filter(pet=pet)
    else:
        qs = scope_filter(principal).apply(qs, via='pet')
    return [serialize_visit(kind, v) for v in qs]


def create_visit(kind: VisitKind, principal: Principal, pet_id, data: dict, client_id=None) -> dict:
    pet = get_pet_record(principal, pet_id, client_id)
    visit = kind.model(pet=pet)
    assign(visit, data, VISIT_FIELDS)
    with transaction.atomic():
        visit.save()
        _insert_lines(kind, visit, data['treatments'])
    logger.info('%s %s created for pet %s by %s', kind.singular, visit.id, pet.id, principal.id)
    return serialize_visit(kind, fetch(_queryset(kind), visit.pk, kind.label))


def get_visit_record(kind: VisitKind, principal: Principal, pk, pet_id=None, client_id=None):
    visit = fetch(_queryset(kind), pk, kind.label)
    authorize_chain(principal, visit, ChainPath(client_id=client_id, pet_id=pet_id))
    return visit


def get_visit(kind: VisitKind, principal: Principal, pk, pet_id=None, client_id=None) -> dict:
    return serialize_visit(kind, get_visit_record(kind, principal, pk, pet_id, client_id))


def update_visit(kind: VisitKind, principal: Principal, pk, data: dict, pet_id=None, client_id=None) -> dict:
    visit = get_visit_record(kind, principal, pk, pet_id, client_id)
    changed = assign(visit, data, VISIT_FIELDS)
    with transaction.atomic():
        if changed:
            visit.save(update_fields=changed + ['updated_at'])
        if 'treatments' in data:
            kind.line_model.objects.filter(**{kind.parent_field: visit}).delete()
            _insert_lines(kind, visit, data['treatments'])
            changed.append('treatments')
    logger.info('%s %s updated by %s: %s', kind.singular, visit.id, principal.id, ', '.join(changed))
    return serialize_visit(kind, fetch(_queryset(kind), visit.pk, kind.label))


def delete_visit(kind: VisitKind, principal: Principal, pk, pet_id=None, client_id=None) -> None:
    visit = get_visit_record(kind, principal, pk, pet_id, client_id)
    visit.delete()
    logger.info('%s %s deleted by %s', kind.singular, pk, principal.id)
