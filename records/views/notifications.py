from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.appointments import ReminderRequestSerializer
from ..services import reminders as svc
from .common import ok


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def send_reminders(request):
    """E-mail today's appointment reminders to the selected clients."""
    s = ReminderRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    tally = svc.send_appointment_reminders(s.validated_data['client_ids'])
    return ok(f'Sent {tally.sent} reminder(s), {tally.failed} failed', data=tally.as_dict())


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def clients_today(request):
    return ok('Clients with appointments today retrieved successfully', data=svc.clients_with_appointments_today())
