"""
Client (pet owner) account management for clinic staff.

Clients are :class:`~records.models.User` rows with the ``client`` role.
Staff create them on behalf of walk-in owners, so the username may be
generated and the initial password is random and never returned.
"""
from __future__ import annotations

import logging
import re
import secrets
import uuid

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count
from django.utils.text import slugify

from ..access import Principal, authorize_admin
from .common import assign, fetch

logger = logging.getLogger(__name__)

User = get_user_model()

CLIENT_FIELDS = ('name', 'email', 'username', 'phone', 'address')


def client_summary(user) -> dict:
    return {
        'id': user.id,
        'name': user.name,
        'username': user.username,
        'email': user.email,
    }


def serialize_client(user, pets=None) -> dict:
    data = {
        **client_summary(user),
        'phone': user.phone,
        'address': user.address,
        'role': user.role,
        'created_at': user.created_at.isoformat() if user.created_at else None,
        'updated_at': user.updated_at.isoformat() if user.updated_at else None,
    }
    if hasattr(user, 'pets_count'):
        data['pets_count'] = user.pets_count
    if pets is not None:
        from .pets import serialize_pet
        data['pets'] = [serialize_pet(p, include_client=False) for p in pets]
    return data


def generate_username(email: str | None, name: str | None) -> str:
    """``<email prefix or name slug>_<6 hex chars>``, unique among users."""
    prefix = ''
    if email:
        prefix = re.sub(r'[^\w.+-]', '', email.split('@', 1)[0])
    if not prefix and name:
        prefix = slugify(name).replace('-', '_')
    prefix = (prefix or 'client')[:100]
    while True:
        candidate = f"{prefix}_{uuid.uuid4().hex[-6:]}"
        if not User.objects.filter(username=candidate).exists():
            return candidate


def load_client(client_id):
    return fetch(User.objects.filter(role=User.ROLE_CLIENT), client_id, 'Client')


def list_clients(principal: Principal) -> list[dict]:
    authorize_admin(principal)
    qs = (User.objects.filter(role=User.ROLE_CLIENT)
          .annotate(pets_count=Count('pets'))
          .order_by('-created_at', '-id'))
    return [serialize_client(u) for u in qs]


@transaction.atomic
def create_client(principal: Principal, data: dict) -> dict:
    authorize_admin(principal)
    username = data.get('username') or generate_username(data.get('email'), data.get('name'))
    user = User.objects.create_user(
        username=username,
        email=data.get('email') or None,
        password=secrets.token_urlsafe(16),
        name=data['name'],
        phone=data.get('phone') or None,
        address=data.get('address') or None,
        role=User.ROLE_CLIENT,
    )
    logger.info('client %s created by %s', user.id, principal.id)
    return serialize_client(user, pets=[])


def get_client(principal: Principal, client_id) -> dict:
    authorize_admin(principal)
    user = load_client(client_id)
    return serialize_client(user, pets=user.pets.all())


def update_client(principal: Principal, client_id, data: dict) -> dict:
    authorize_admin(principal)
    user = load_client(client_id)
    changed = assign(user, data, CLIENT_FIELDS)
    if changed:
        user.save(update_fields=changed + ['updated_at'])
        logger.info('client %s updated by %s: %s', user.id, principal.id, ', '.join(changed))
    return serialize_client(user, pets=user.pets.all())


def delete_client(principal: Principal, client_id) -> None:
    authorize_admin(principal)
    user = load_client(client_id)
    user.delete()
    logger.info('client %s deleted by %s', client_id, principal.id)
