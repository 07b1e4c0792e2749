"""
Read-only endpoints for pet owners.

Every handler goes through the same ownership checks as the staff routes,
so a client can only ever reach their own pets.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsClientRole
from ..services import consultations as consultation_svc
from ..services import pets as pet_svc
from ..services import preventive as visit_svc
from .common import ok, principal_of


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClientRole])
def my_pets(request):
    return ok('Pets retrieved successfully', data=pet_svc.list_pets(principal_of(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClientRole])
def my_pet(request, pet_id: int):
    """A pet with its consultations, vaccinations and dewormings."""
    return ok('Pet retrieved successfully', data=pet_svc.get_pet_history(principal_of(request), pet_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClientRole])
def my_pet_consultations(request, pet_id: int):
    data = consultation_svc.list_consultations(principal_of(request), pet_id=pet_id)
    return ok('Consultations retrieved successfully', data=data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClientRole])
def my_pet_vaccinations(request, pet_id: int):
    data = visit_svc.list_visits(visit_svc.VACCINATIONS, principal_of(request), pet_id=pet_id)
    return ok('Vaccinations retrieved successfully', data=data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClientRole])
def my_pet_dewormings(request, pet_id: int):
    data = visit_svc.list_visits(visit_svc.DEWORMINGS, principal_of(request), pet_id=pet_id)
    return ok('Dewormings retrieved successfully', data=data)
