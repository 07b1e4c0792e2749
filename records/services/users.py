"""
Self-service account operations.

Every function acts on the caller's own row.  The role is never writable
here; a password change always re-verifies the current password.
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from ..exceptions import ValidationError
from ..models import Pet
from .clients import serialize_client
from .common import assign
from .pets import serialize_pet

logger = logging.getLogger(__name__)

User = get_user_model()

PROFILE_FIELDS = ('name', 'username', 'email', 'phone', 'address')


@transaction.atomic
def register_client(data: dict):
    user = User(
        username=data['username'],
        email=data['email'],
        name=data['name'],
        role=User.ROLE_CLIENT,
    )
    user.set_password(data['password'])
    user.save()
    logger.info('client %s registered', user.id)
    return user


def _check_current_password(user, current_password) -> None:
    if not current_password or not user.check_password(current_password):
        raise ValidationError({'current_password': ['The current password is incorrect.']})


def get_profile(user) -> dict:
    return serialize_client(user)


def update_profile(user, data: dict) -> dict:
    if 'password' in data:
        _check_current_password(user, data.get('current_password'))
    changed = assign(user, data, PROFILE_FIELDS)
    if 'password' in data:
        user.set_password(data['password'])
        changed.append('password')
    if changed:
        user.save(update_fields=changed + ['updated_at'])
        logger.info('user %s updated own profile: %s', user.id, ', '.join(changed))
    return serialize_client(user)


def update_username(user, username: str) -> dict:
    user.username = username
    user.save(update_fields=['username', 'updated_at'])
    logger.info('user %s changed username', user.id)
    return serialize_client(user)


def update_email(user, email: str) -> dict:
    user.email = email
    user.save(update_fields=['email', 'updated_at'])
    logger.info('user %s changed email', user.id)
    return serialize_client(user)


def update_password(user, current_password: str, password: str) -> None:
    _check_current_password(user, current_password)
    user.set_password(password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info('user %s changed password', user.id)


def own_pets(user) -> list[dict]:
    qs = Pet.objects.select_related('client').filter(client=user)
    return [serialize_pet(p) for p in qs]
