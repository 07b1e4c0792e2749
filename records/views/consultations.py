"""
Consultation endpoints, nested under ``clients/<id>/pets/<id>``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.medical import ConsultationSerializer
from ..services import consultations as svc
from .common import created, ok, principal_of


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def consultations_list(request):
    return ok('Consultations retrieved successfully', consultations=svc.list_consultations(principal_of(request)))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def pet_consultations(request, client_id: int, pet_id: int):
    principal = principal_of(request)
    if request.method == 'GET':
        data = svc.list_consultations(principal, pet_id=pet_id, client_id=client_id)
        return ok('Consultations retrieved successfully', consultations=data)
    s = ConsultationSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = svc.create_consultation(principal, pet_id, s.validated_data, client_id=client_id)
    return created('Consultation created successfully', consultation=data)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def consultation_detail(request, client_id: int, pet_id: int, consultation_id: int):
    principal = principal_of(request)
    if request.method == 'GET':
        data = svc.get_consultation(principal, consultation_id, pet_id=pet_id, client_id=client_id)
        return ok('Consultation retrieved successfully', consultation=data)
    if request.method == 'DELETE':
        svc.delete_consultation(principal, consultation_id, pet_id=pet_id, client_id=client_id)
        return ok('Consultation deleted successfully')
    s = ConsultationSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    data = svc.update_consultation(principal, consultation_id, s.validated_data, pet_id=pet_id, client_id=client_id)
    return ok('Consultation updated successfully', consultation=data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def consultation_latest(request, client_id: int, pet_id: int, consultation_id: int):
    """The consultation with its five most recent lab tests, treatments and prescriptions."""
    data = svc.latest_records(principal_of(request), consultation_id, pet_id=pet_id, client_id=client_id)
    return ok('Latest records retrieved successfully', consultation=data)
