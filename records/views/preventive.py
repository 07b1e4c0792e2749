"""
Vaccination and deworming endpoints, nested under ``clients/<id>/pets/<id>``.

Both carry a ``treatments`` array; see :mod:`records.services.preventive`.
"""
from __future__ import annotations

from types import SimpleNamespace

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.preventive import DewormingSerializer, VaccinationSerializer
from ..services import preventive as svc
from .common import created, ok, principal_of


def visit_views(kind: svc.VisitKind, serializer_class, plural: str) -> SimpleNamespace:

    @api_view(['GET', 'POST'])
    @permission_classes([IsAuthenticated, IsAdminRole])
    def collection(request, client_id: int, pet_id: int):
        principal = principal_of(request)
        if request.method == 'GET':
            rows = svc.list_visits(kind, principal, pet_id=pet_id, client_id=client_id)
            return ok(f'{kind.label}s retrieved successfully', **{plural: rows})
        s = serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        row = svc.create_visit(kind, principal, pet_id, s.validated_data, client_id=client_id)
        return created(f'{kind.label} created successfully', **{kind.singular: row})

    @api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
    @permission_classes([IsAuthenticated, IsAdminRole])
    def detail(request, client_id: int, pet_id: int, pk: int):
        principal = principal_of(request)
        if request.method == 'GET':
            row = svc.get_visit(kind, principal, pk, pet_id=pet_id, client_id=client_id)
            return ok(f'{kind.label} retrieved successfully', **{kind.singular: row})
        if request.method == 'DELETE':
            svc.delete_visit(kind, principal, pk, pet_id=pet_id, client_id=client_id)
            return ok(f'{kind.label} deleted successfully')
        s = serializer_class(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        row = svc.update_visit(kind, principal, pk, s.validated_data, pet_id=pet_id, client_id=client_id)
        return ok(f'{kind.label} updated successfully', **{kind.singular: row})

    return SimpleNamespace(collection=collection, detail=detail)


vaccinations = visit_views(svc.VACCINATIONS, VaccinationSerializer, 'vaccinations')
dewormings = visit_views(svc.DEWORMINGS, DewormingSerializer, 'dewormings')
