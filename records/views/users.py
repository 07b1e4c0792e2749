"""
Self-service profile endpoints for the signed-in user.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..serializers.users import EmailSerializer, PasswordSerializer, ProfileSerializer, UsernameSerializer
from ..services import users as svc
from .common import ok


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile(request):
    if request.method == 'GET':
        return ok('Profile retrieved successfully', data=svc.get_profile(request.user))
    s = ProfileSerializer(data=request.data, partial=True, context={'user_id': request.user.pk})
    s.is_valid(raise_exception=True)
    return ok('Profile updated successfully', data=svc.update_profile(request.user, s.validated_data))


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_username(request):
    s = UsernameSerializer(data=request.data, context={'user_id': request.user.pk})
    s.is_valid(raise_exception=True)
    return ok('Username updated successfully', data=svc.update_username(request.user, s.validated_data['username']))


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_email(request):
    s = EmailSerializer(data=request.data, context={'user_id': request.user.pk})
    s.is_valid(raise_exception=True)
    return ok('Email updated successfully', data=svc.update_email(request.user, s.validated_data['email']))


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_password(request):
    s = PasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.update_password(request.user, s.validated_data['current_password'], s.validated_data['password'])
    return ok('Password updated successfully')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_pets(request):
    return ok('Pets retrieved successfully', data=svc.own_pets(request.user))
