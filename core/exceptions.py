from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler
import logging

logger = logging.getLogger(__name__)


class InvalidStatus(APIException):
    """Requested application status is not a legal transition."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status"
    default_code = "invalid_status"


class StoreError(Exception):
    """Unexpected failure inside the storage layer (missing row, database error)."""


def _first_message(errors):
    if isinstance(errors, dict):
        for value in errors.values():
            return _first_message(value)
    if isinstance(errors, (list, tuple)) and errors:
        return _first_message(errors[0])
    return str(errors)


def portal_exception_handler(exc, context):
    """
    DRF exception handler. Store errors become 400s and every error body is
    reshaped to ``{"message": ...}`` so clients can show it directly.
    """
    if isinstance(exc, StoreError):
        view = context.get('view')
        logger.error(f"Store error in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        return Response({'message': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'message': _first_message(response.data),
            'errors': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'message': str(response.data['detail'])}

    return response
