"""
Staff dashboard endpoint: head counts of clients, staff and pets.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services.dashboard import dashboard_totals
from .common import ok, principal_of


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    return ok('Dashboard data retrieved successfully', data=dashboard_totals(principal_of(request)))
