"""
Token authentication for the API.

Kept apart from the views so that DRF can import it while settings are
being loaded without pulling in models through the view modules.  Clients
may authenticate with either ``Authorization: Token <key>`` (issued at
login) or a SimpleJWT ``Authorization: Bearer <access>`` token.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Legacy opaque token issued by the login endpoint."""

    keyword = 'Token'
