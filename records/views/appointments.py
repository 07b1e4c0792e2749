"""
Appointment endpoints for clinic staff.

``GET /api/admin/appointments?filter=today|week|month|all`` lists by the
clinic's local calendar.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.appointments import AppointmentListQuerySerializer, AppointmentSerializer
from ..services import appointments as svc
from .common import created, ok, principal_of


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def appointments_collection(request):
    principal = principal_of(request)
    if request.method == 'GET':
        q = AppointmentListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return ok('Appointments retrieved successfully',
                  data=svc.list_appointments(principal, q.validated_data['filter']))
    s = AppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return created('Appointment created successfully', data=svc.create_appointment(principal, s.validated_data))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def appointment_detail(request, pk: int):
    principal = principal_of(request)
    if request.method == 'GET':
        return ok('Appointment retrieved successfully', data=svc.get_appointment(principal, pk))
    if request.method == 'DELETE':
        svc.delete_appointment(principal, pk)
        return ok('Appointment deleted successfully')
    s = AppointmentSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    return ok('Appointment updated successfully', data=svc.update_appointment(principal, pk, s.validated_data))
