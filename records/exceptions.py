"""
Error taxonomy and the project-wide DRF exception handler.

Services raise the exceptions below; views never catch them.  The handler
renders every failure into the ``{success: false, message, errors?}``
envelope the front-end expects.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

HTTP_422_UNPROCESSABLE_ENTITY = 422


class ValidationError(exceptions.ValidationError):
    """Malformed, missing or out-of-range input; ``detail`` is keyed by field."""
    status_code = HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'The given data was invalid.'


class ChainMismatchError(exceptions.APIException):
    """The ancestor ids in the URL do not form the record's ownership chain."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The requested record does not belong to the given parent records.'
    default_code = 'chain_mismatch'


class AuthorizationError(exceptions.PermissionDenied):
    default_detail = 'You are not allowed to access this record.'


class NotFoundError(exceptions.NotFound):
    default_detail = 'Record not found.'


class UnexpectedError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server error.'
    default_code = 'server_error'


def _redacted(message: str) -> str:
    if getattr(settings, 'EXPOSE_ERROR_DETAILS', False):
        return message
    return UnexpectedError.default_detail


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('unhandled error on %s', getattr(request, 'path', '?'))
        return Response({'success': False, 'message': _redacted(str(exc))},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        # Serializer failures are reported as 422 just like our own ValidationError
        errors = resp.data if isinstance(resp.data, dict) else {'non_field_errors': resp.data}
        return Response(
            {'success': False, 'message': ValidationError.default_detail, 'errors': errors},
            status=HTTP_422_UNPROCESSABLE_ENTITY,
        )

    if isinstance(resp.data, dict):
        message = resp.data.get('detail') or resp.data
    else:
        message = str(resp.data)
    if resp.status_code >= 500:
        logger.error('server error: %s', message)
        message = _redacted(str(message))

    response = Response({'success': False, 'message': message}, status=resp.status_code)
    for header in ('WWW-Authenticate', 'Retry-After'):
        if header in resp:
            response[header] = resp[header]
    return response
