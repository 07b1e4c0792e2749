from __future__ import annotations

import datetime as dt

from django.contrib.auth import get_user_model
from django.utils import timezone

from ..access import Principal, authorize_admin
from ..models import Pet

User = get_user_model()

RECENT_DAYS = 30


def dashboard_totals(principal: Principal, now: dt.datetime | None = None) -> dict:
    """Head counts for the staff dashboard."""
    authorize_admin(principal)
    since = (now or timezone.now()) - dt.timedelta(days=RECENT_DAYS)
    clients = User.objects.filter(role=User.ROLE_CLIENT)
    return {
        'total_clients': clients.count(),
        'total_admins': User.objects.filter(role=User.ROLE_ADMIN).count(),
        'total_pets': Pet.objects.count(),
        'total_canines': Pet.objects.filter(species='canine').count(),
        'total_felines': Pet.objects.filter(species='feline').count(),
        'recent_clients': clients.filter(created_at__gte=since).count(),
        'recent_pets': Pet.objects.filter(created_at__gte=since).count(),
    }
