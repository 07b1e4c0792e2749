"""
Ownership chain validation.

Every record in the clinic hangs off a client through a fixed chain::

    client → pet → consultation → labtest | treatment | prescription
    client → pet → vaccination | deworming | appointment

Services never branch on the caller's role themselves; they build a
:class:`Principal` from the request and ask this module whether the caller
may touch a record (``authorize_direct`` / ``authorize_chain``) or which
rows a listing may return (``scope_filter``).

Checks always run in the same order: the record is loaded first (404 when
absent), then ownership is checked (403), then any ancestor ids taken from
the URL are compared against the record's real ancestors (400).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.db.models import QuerySet

from .exceptions import AuthorizationError, ChainMismatchError
from .models import (
    Appointment,
    Consultation,
    Deworming,
    Labtest,
    Pet,
    Prescription,
    Treatment,
    User,
    Vaccination,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every service call."""
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> 'Principal':
        return cls(id=user.pk, role=getattr(user, 'role', User.ROLE_CLIENT))

    @property
    def is_admin(self) -> bool:
        return self.role == User.ROLE_ADMIN


@dataclass(frozen=True)
class ChainPath:
    """Ancestor ids of a record; ``None`` means the segment was not supplied."""
    client_id: Optional[int] = None
    pet_id: Optional[int] = None
    consultation_id: Optional[int] = None

    def segments(self):
        return [
            ('client', self.client_id),
            ('pet', self.pet_id),
            ('consultation', self.consultation_id),
        ]


def resolve_chain(record) -> ChainPath:
    """Return the actual ancestor ids of ``record``."""
    if isinstance(record, User):
        return ChainPath(client_id=record.pk)
    if isinstance(record, Pet):
        return ChainPath(client_id=record.client_id, pet_id=record.pk)
    if isinstance(record, Consultation):
        return ChainPath(client_id=record.pet.client_id, pet_id=record.pet_id, consultation_id=record.pk)
    if isinstance(record, (Labtest, Treatment, Prescription)):
        consultation = record.consultation
        return ChainPath(
            client_id=consultation.pet.client_id,
            pet_id=consultation.pet_id,
            consultation_id=consultation.pk,
        )
    if isinstance(record, (Vaccination, Deworming)):
        return ChainPath(client_id=record.pet.client_id, pet_id=record.pet_id)
    if isinstance(record, Appointment):
        return ChainPath(client_id=record.client_id, pet_id=record.pet_id)
    raise TypeError(f"no ownership chain for {type(record).__name__}")


def authorize_direct(principal: Principal, owner_client_id: Optional[int]) -> None:
    """Allow admins, or the client that owns the record."""
    if principal.is_admin:
        return
    if principal.role == User.ROLE_CLIENT and owner_client_id is not None and principal.id == owner_client_id:
        return
    logger.warning('access denied: principal %s on record owned by client %s', principal.id, owner_client_id)
    raise AuthorizationError()


def authorize_admin(principal: Principal) -> None:
    """Allow only clinic staff."""
    authorize_direct(principal, None)


def authorize_chain(principal: Principal, record, path: ChainPath | None = None) -> ChainPath:
    """Authorize ``principal`` on an already loaded ``record``.

    Ownership is checked against the record's real owner first, then every
    supplied segment of ``path`` must equal the corresponding real ancestor.
    Returns the resolved chain.
    """
    actual = resolve_chain(record)
    authorize_direct(principal, actual.client_id)
    if path is not None:
        for (segment, expected), (_, real) in zip(path.segments(), actual.segments()):
            if expected is None:
                continue
            if real is None or int(expected) != int(real):
                logger.warning('chain mismatch on %s %s: %s %s != %s',
                               type(record).__name__, record.pk, segment, expected, real)
                raise ChainMismatchError()
    return actual


class Scope:
    """Row-level restriction for listings.

    Admins are unrestricted.  For a client the owned pet ids are
    materialised once and consultation-level tables are filtered by the
    consultation ids of those pets.
    """

    def __init__(self, principal: Principal):
        self.principal = principal
        self._pet_ids: Optional[list[int]] = None
        self._consultation_ids: Optional[list[int]] = None

    @property
    def unrestricted(self) -> bool:
        return self.principal.is_admin

    @property
    def pet_ids(self) -> list[int]:
        if self._pet_ids is None:
            self._pet_ids = list(Pet.objects.filter(client_id=self.principal.id).values_list('id', flat=True))
        return self._pet_ids

    @property
    def consultation_ids(self) -> list[int]:
        if self._consultation_ids is None:
            self._consultation_ids = list(
                Consultation.objects.filter(pet_id__in=self.pet_ids).values_list('id', flat=True)
            )
        return self._consultation_ids

    def apply(self, qs: QuerySet, via: str = 'pet') -> QuerySet:
        """Filter ``qs`` down to what the principal may see.

        ``via`` names the column tying the table to the chain: ``pet``
        (``pet_id``), ``consultation`` (``consultation_id``), ``client``
        (``client_id``) or ``self`` for the pets table itself.
        """
        if self.unrestricted:
            return qs
        if via == 'self':
            return qs.filter(id__in=self.pet_ids)
        if via == 'pet':
            return qs.filter(pet_id__in=self.pet_ids)
        if via == 'consultation':
            return qs.filter(consultation_id__in=self.consultation_ids)
        if via == 'client':
            return qs.filter(client_id=self.principal.id)
        raise ValueError(f"unknown scope column: {via}")


def scope_filter(principal: Principal) -> Scope:
    return Scope(principal)
