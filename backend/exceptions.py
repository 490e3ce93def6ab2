"""
Error normalization for every API view.

DRF exceptions keep their status code and get a uniform body. Anything
else is logged server-side and answered with a generic 500.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class AlreadyExists(APIException):
    """Raised when a unique resource or association already exists."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Resource already exists.'
    default_code = 'already_exists'


def _first_message(detail):
    """Pull the first human readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown'

    if response is None:
        set_rollback()
        logger.exception(f"Unhandled error in {view_name}: {exc}")
        return Response(
            {'error': 'Internal server error', 'status_code': status.HTTP_500_INTERNAL_SERVER_ERROR},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    body = {
        'error': _first_message(response.data),
        'status_code': response.status_code,
    }
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        body['errors'] = response.data

    if response.status_code >= 500:
        logger.error(f"{view_name} failed with {response.status_code}: {body['error']}")
    else:
        logger.warning(f"{view_name} rejected request ({response.status_code}): {body['error']}")

    response.data = body
    return response
