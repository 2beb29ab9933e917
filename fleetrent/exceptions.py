"""
Domain errors shared by the users, vehicles and bookings apps.

Services raise these; the DRF exception handler below turns every error
(domain, validation, authentication, 404) into the API error envelope:

    {"success": false, "message": "...", "errors": ...}
"""
import logging

from django.http import Http404
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed'
    default_code = 'domain_error'
    message = 'Request failed'

    def __init__(self, detail=None, message=None):
        super().__init__(detail=detail)
        if message is not None:
            self.message = message


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'
    default_code = 'not_found'
    message = 'Not found'


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource conflict'
    default_code = 'conflict'
    message = 'Conflict'


class FailedPrecondition(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Operation not allowed in the current state'
    default_code = 'failed_precondition'
    message = 'Operation not allowed'


class PermissionDenied(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action'
    default_code = 'permission_denied'
    message = 'Access denied'


class InvalidArgument(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid argument'
    default_code = 'invalid_argument'
    message = 'Invalid request'


class Unauthorized(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication failed'
    default_code = 'unauthorized'
    message = 'Authentication failed'


def parse_id(value, label='ID'):
    """Parse a path identifier, rejecting anything that is not a positive integer."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f'{label} must be a number', message=f'Invalid {label}')
    if parsed <= 0:
        raise InvalidArgument(f'{label} must be a positive number', message=f'Invalid {label}')
    return parsed


def _envelope_message(exc):
    if isinstance(exc, DomainError):
        return exc.message
    if isinstance(exc, exceptions.ValidationError):
        return 'Validation failed'
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return 'Authentication required'
    if isinstance(exc, exceptions.PermissionDenied):
        return 'Access denied'
    if isinstance(exc, exceptions.NotFound):
        return 'Not found'
    if isinstance(exc, exceptions.MethodNotAllowed):
        return 'Method not allowed'
    return 'Request failed'


def envelope_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else 'view')
        return None

    response.data = {
        'success': False,
        'message': _envelope_message(exc),
        'errors': response.data.get('detail', response.data) if isinstance(response.data, dict) else response.data,
    }
    return response
