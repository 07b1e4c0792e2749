from rest_framework import status as http_status
from rest_framework.response import Response

from ..access import ChainPath, Principal


def principal_of(request) -> Principal:
    return Principal.from_user(request.user)


def path_of(client=None, pet=None, consultation=None) -> ChainPath:
    return ChainPath(client_id=client, pet_id=pet, consultation_id=consultation)


def ok(message: str, status: int = http_status.HTTP_200_OK, **payload) -> Response:
    """Success envelope: ``{success, message, <resource>...}``."""
    return Response({'success': True, 'message': message, **payload}, status=status)


def created(message: str, **payload) -> Response:
    return ok(message, status=http_status.HTTP_201_CREATED, **payload)
