"""
Appointment scheduling.

Appointment times are stored in UTC.  "Today", "this week" and "this
month" are the clinic's calendar periods in ``settings.TIME_ZONE``; their
bounds are computed as aware datetimes ``[start, end)`` so the comparison
runs against the stored UTC values.  Naive input times are read as
clinic-local wall-clock time.
"""
from __future__ import annotations

import datetime as dt
import logging

from django.utils import timezone

from ..access import ChainPath, Principal, authorize_admin, authorize_chain, scope_filter
from ..exceptions import ChainMismatchError, ValidationError
from ..models import Appointment
from .clients import client_summary, load_client
from .common import assign, fetch
from .pets import load_pet

logger = logging.getLogger(__name__)

APPOINTMENT_FIELDS = ('appointment_date', 'types')
PERIODS = ('all', 'today', 'week', 'month')


def _local_midnight(day: dt.date) -> dt.datetime:
    return timezone.make_aware(dt.datetime.combine(day, dt.time.min), timezone.get_current_timezone())


def local_day_bounds(day: dt.date) -> tuple[dt.datetime, dt.datetime]:
    return _local_midnight(day), _local_midnight(day + dt.timedelta(days=1))


def period_bounds(period: str, now: dt.datetime | None = None):
    """Aware ``(start, end)`` of the clinic-local period containing ``now``.

    Returns ``None`` for ``all``.  Weeks start on Monday.
    """
    if period not in PERIODS:
        raise ValidationError({'filter': [f'Must be one of: {", ".join(PERIODS)}.']})
    if period == 'all':
        return None
    today = timezone.localdate(now or timezone.now())
    if period == 'today':
        return local_day_bounds(today)
    if period == 'week':
        monday = today - dt.timedelta(days=today.weekday())
        return _local_midnight(monday), _local_midnight(monday + dt.timedelta(days=7))
    first = today.replace(day=1)
    following = (first + dt.timedelta(days=32)).replace(day=1)
    return _local_midnight(first), _local_midnight(following)


def in_period(qs, period: str, now: dt.datetime | None = None):
    bounds = period_bounds(period, now)
    if bounds is None:
        return qs
    start, end = bounds
    return qs.filter(appointment_date__gte=start, appointment_date__lt=end)


def serialize_appointment(a) -> dict:
    return {
        'id': a.id,
        'client_id': a.client_id,
        'pet_id': a.pet_id,
        'appointment_date': timezone.localtime(a.appointment_date).isoformat(),
        'types': a.types,
        'client': client_summary(a.client),
        'pet': {'id': a.pet.id, 'name': a.pet.name, 'species': a.pet.species, 'breed': a.pet.breed},
        'created_at': a.created_at.isoformat() if a.created_at else None,
        'updated_at': a.updated_at.isoformat() if a.updated_at else None,
    }


def _queryset():
    return Appointment.objects.select_related('client', 'pet')


def _as_aware(value: dt.datetime) -> dt.datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_current_timezone())
    return value


def _matching_pet(client, pet_id):
    pet = load_pet(pet_id)
    if pet.client_id != client.id:
        logger.warning('appointment pet %s does not belong to client %s', pet.id, client.id)
        raise ChainMismatchError('Pet does not belong to this client.')
    return pet


def list_appointments(principal: Principal, period: str = 'all', now: dt.datetime | None = None) -> list[dict]:
    qs = scope_filter(principal).apply(_queryset(), via='client')
    return [serialize_appointment(a) for a in in_period(qs, period, now)]


def create_appointment(principal: Principal, data: dict) -> dict:
    authorize_admin(principal)
    client = load_client(data['client_id'])
    pet = _matching_pet(client, data['pet_id'])
    a = Appointment(client=client, pet=pet, types=data['types'],
                    appointment_date=_as_aware(data['appointment_date']))
    a.save()
    logger.info('appointment %s created for pet %s by %s', a.id, pet.id, principal.id)
    return serialize_appointment(a)


def get_appointment_record(principal: Principal, pk) -> Appointment:
    a = fetch(_queryset(), pk, 'Appointment')
    authorize_chain(principal, a, ChainPath())
    return a


def get_appointment(principal: Principal, pk) -> dict:
    return serialize_appointment(get_appointment_record(principal, pk))


def update_appointment(principal: Principal, pk, data: dict) -> dict:
    authorize_admin(principal)
    a = get_appointment_record(principal, pk)
    changed = assign(a, data, APPOINTMENT_FIELDS)
    if 'appointment_date' in data:
        a.appointment_date = _as_aware(data['appointment_date'])
    if 'client_id' in data or 'pet_id' in data:
        client = load_client(data['client_id']) if 'client_id' in data else a.client
        pet = _matching_pet(client, data.get('pet_id', a.pet_id))
        a.client, a.pet = client, pet
        changed += ['client', 'pet']
    if changed:
        a.save(update_fields=changed + ['updated_at'])
        logger.info('appointment %s updated by %s: %s', a.id, principal.id, ', '.join(changed))
    return serialize_appointment(a)


def delete_appointment(principal: Principal, pk) -> None:
    authorize_admin(principal)
    a = get_appointment_record(principal, pk)
    a.delete()
    logger.info('appointment %s deleted by %s', pk, principal.id)
