"""
Authentication views.

Login issues both the legacy DRF token (``Authorization: Token <key>``)
and a SimpleJWT access/refresh pair (``Authorization: Bearer <access>``).
These views live apart from :mod:`records.authentication` so that DRF can
load the authentication class without importing the views.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, get_user_model
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers.auth import LoginSerializer, RegisterSerializer
from .services.clients import serialize_client
from .services.users import register_client

logger = logging.getLogger(__name__)

User = get_user_model()


def _token_payload(user) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': serialize_client(user),
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Log in with username (or e-mail address) and password."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    identifier = s.validated_data['username']
    password = s.validated_data['password']

    if '@' in identifier:
        match = User.objects.filter(email__iexact=identifier).first()
        if match:
            identifier = match.username

    user = authenticate(request, username=identifier, password=password)
    if not user:
        logger.warning('failed login for %s from %s', identifier, request.META.get('REMOTE_ADDR'))
        return Response({'success': False, 'message': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)

    logger.info('user %s logged in', user.id)
    return Response({'success': True, 'message': 'Login successful', **_token_payload(user)})

# ScopedRateThrottle reads throttle_scope from the wrapped view class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """Create a client account and sign it in."""
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = register_client(s.validated_data)
    return Response({'success': True, 'message': 'Registration successful', **_token_payload(user)},
                    status=status.HTTP_201_CREATED)

register_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Revoke the legacy token and blacklist the caller's refresh tokens."""
    Token.objects.filter(user=request.user).delete()
    count = 0
    for outstanding in OutstandingToken.objects.filter(user=request.user):
        _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
        count += int(created)
    logger.info('user %s logged out, %s refresh token(s) blacklisted', request.user.id, count)
    return Response({'success': True, 'message': 'Logged out successfully'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    return Response({'success': True, 'user': serialize_client(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Exchange a refresh token for a new access token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as exc:
        raise InvalidToken(exc.args[0]) from exc
    data = dict(s.validated_data)
    payload = {'success': True, 'jwt_access': data.pop('access')}
    if 'refresh' in data:
        payload['jwt_refresh'] = data['refresh']
    return Response(payload)
