"""
Pet endpoints.

Staff manage pets nested under a client; any authenticated caller may
list the pets visible to them through ``GET /api/pets``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.pets import PetSerializer
from ..services import pets as svc
from .common import created, ok, principal_of


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pets_list(request):
    return ok('Pets retrieved successfully', pets=svc.list_pets(principal_of(request)))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def client_pets(request, client_id: int):
    principal = principal_of(request)
    if request.method == 'GET':
        return ok('Pets retrieved successfully', pets=svc.list_pets(principal, client_id=client_id))
    s = PetSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return created('Pet created successfully', pet=svc.create_pet(principal, client_id, s.validated_data))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def client_pet_detail(request, client_id: int, pet_id: int):
    principal = principal_of(request)
    if request.method == 'GET':
        return ok('Pet retrieved successfully', pet=svc.get_pet(principal, pet_id, client_id=client_id))
    if request.method == 'DELETE':
        svc.delete_pet(principal, pet_id, client_id=client_id)
        return ok('Pet deleted successfully')
    s = PetSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    return ok('Pet updated successfully', pet=svc.update_pet(principal, pet_id, s.validated_data, client_id=client_id))
