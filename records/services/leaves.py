"""
Lab tests, treatments and prescriptions.

The three record types filed under a consultation share one set of
operations; a :class:`LeafKind` describes what differs between them
(model, writable fields and which field, if any, holds uploaded photos).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction

from ..access import ChainPath, Principal, authorize_chain, authorize_direct, scope_filter
from ..models import Labtest, Prescription, Treatment
from .common import assign, discard_photos_on_commit, fetch, store_photos
from .consultations import consultation_summary, get_consultation_record, load_consultation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafKind:
    model: type
    label: str
    singular: str
    plural: str
    fields: tuple
    photo_field: Optional[str] = None


LABTESTS = LeafKind(Labtest, 'Lab test', 'labtest', 'labtests', ('lab_types', 'notes'), photo_field='photo_result')
TREATMENTS = LeafKind(Treatment, 'Treatment', 'treatment', 'treatments',
                      ('treatment_type', 'meds_name', 'treatment_details'))
PRESCRIPTIONS = LeafKind(Prescription, 'Prescription', 'prescription', 'prescriptions', ('description',),
                         photo_field='upload_photo')


def serialize_leaf(kind: LeafKind, obj, include_parent: bool = True) -> dict:
    data = {'id': obj.id, 'consultation_id': obj.consultation_id}
    for field in kind.fields:
        data[field] = getattr(obj, field)
    if kind.photo_field:
        data[kind.photo_field] = list(getattr(obj, kind.photo_field) or [])
    data['created_at'] = obj.created_at.isoformat() if obj.created_at else None
    data['updated_at'] = obj.updated_at.isoformat() if obj.updated_at else None
    if include_parent:
        data['consultation'] = consultation_summary(obj.consultation)
    return data


def _queryset(kind: LeafKind):
    return kind.model.objects.select_related('consultation__pet__client')


def list_leaves(kind: LeafKind, principal: Principal, consultation_id=None, path: ChainPath | None = None):
    """Records of one consultation, or all the caller may see.

    A ``consultation_id`` query filter is authorized against the
    consultation's owner before it is applied.
    """
    qs = _queryset(kind)
    if consultation_id is not None:
        if path is not None:
            consultation = get_consultation_record(principal, consultation_id, path.pet_id, path.client_id)
        else:
            consultation = load_consultation(consultation_id)
            authorize_direct(principal, consultation.pet.client_id)
        qs = qs.filter(consultation=consultation)
    else:
        qs = scope_filter(principal).apply(qs, via='consultation')
    return [serialize_leaf(kind, obj) for obj in qs]


def create_leaf(kind: LeafKind, principal: Principal, consultation_id, data: dict,
                path: ChainPath | None = None) -> dict:
    path = path or ChainPath()
    consultation = get_consultation_record(principal, consultation_id, path.pet_id, path.client_id)
    obj = kind.model(consultation=consultation)
    assign(obj, data, kind.fields)
    with transaction.atomic():
        if kind.photo_field:
            setattr(obj, kind.photo_field, store_photos(data.get(kind.photo_field), kind.plural))
        obj.save()
    logger.info('%s %s created under consultation %s by %s', kind.singular, obj.id, consultation.id, principal.id)
    return serialize_leaf(kind, obj)


def get_leaf_record(kind: LeafKind, principal: Principal, pk, path: ChainPath | None = None):
    obj = fetch(_queryset(kind), pk, kind.label)
    authorize_chain(principal, obj, path)
    return obj


def get_leaf(kind: LeafKind, principal: Principal, pk, path: ChainPath | None = None) -> dict:
    return serialize_leaf(kind, get_leaf_record(kind, principal, pk, path))


def update_leaf(kind: LeafKind, principal: Principal, pk, data: dict, path: ChainPath | None = None) -> dict:
    obj = get_leaf_record(kind, principal, pk, path)
    changed = assign(obj, data, kind.fields)
    with transaction.atomic():
        if kind.photo_field and data.get(kind.photo_field):
            # New uploads replace the stored set
            discard_photos_on_commit(getattr(obj, kind.photo_field))
            setattr(obj, kind.photo_field, store_photos(data[kind.photo_field], kind.plural))
            changed.append(kind.photo_field)
        if changed:
            obj.save(update_fields=changed + ['updated_at'])
    if changed:
        logger.info('%s %s updated by %s: %s', kind.singular, obj.id, principal.id, ', '.join(changed))
    return serialize_leaf(kind, obj)


def delete_leaf(kind: LeafKind, principal: Principal, pk, path: ChainPath | None = None) -> None:
    obj = get_leaf_record(kind, principal, pk, path)
    with transaction.atomic():
        if kind.photo_field:
            discard_photos_on_commit(getattr(obj, kind.photo_field))
        obj.delete()
    logger.info('%s %s deleted by %s', kind.singular, pk, principal.id)
