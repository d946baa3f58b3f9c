"""
API error handling

Every error leaves the API as {"success": false, "message": ...} with the
status code from the taxonomy: 400 validation, 401 authentication,
403 permission, 404 not found, 409 conflict, 500 anything else.
"""
import logging
import traceback

from django.conf import settings
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def _message_from(detail):
    """Pick a readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        if not detail:
            return 'Validation failed'
        field, errors = next(iter(detail.items()))
        message = _message_from(errors)
        if field == api_settings.NON_FIELD_ERRORS_KEY:
            return message
        return f"{field}: {message}"
    if isinstance(detail, list):
        return _message_from(detail[0]) if detail else 'Validation failed'
    return str(detail)


def api_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER: reshape errors into the project's JSON envelope."""
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error in %s: %s", context.get('view'), exc)
        return Response(
            {'success': False, 'message': 'A record with these details already exists'},
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", context.get('view'), exc_info=exc)
        body = {'success': False, 'message': 'Server error'}
        if settings.DEBUG:
            body['error'] = str(exc)
            body['trace'] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {'success': False, 'message': _message_from(response.data)}
    if isinstance(exc, ValidationError):
        body['errors'] = response.data
    response.data = body
    return response
