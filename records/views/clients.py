"""
Client account management for clinic staff.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.users import ClientSerializer
from ..services import clients as svc
from .common import created, ok, principal_of


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def clients_collection(request):
    principal = principal_of(request)
    if request.method == 'GET':
        return ok('Clients retrieved successfully', clients=svc.list_clients(principal))
    s = ClientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return created('Client created successfully', client=svc.create_client(principal, s.validated_data))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def client_detail(request, client_id: int):
    principal = principal_of(request)
    if request.method == 'GET':
        return ok('Client retrieved successfully', client=svc.get_client(principal, client_id))
    if request.method == 'DELETE':
        svc.delete_client(principal, client_id)
        return ok('Client deleted successfully')
    s = ClientSerializer(data=request.data, partial=True, context={'user_id': client_id})
    s.is_valid(raise_exception=True)
    return ok('Client updated successfully', client=svc.update_client(principal, client_id, s.validated_data))
