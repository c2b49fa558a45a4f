import logging
from contextlib import contextmanager

from django.db import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for every error the portal reports to its callers."""
    status_code = 400
    default_message = "Request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FieldValidationError(PortalError):
    """A required field is missing or malformed. Raised before any write."""
    default_message = "Please fill in all required fields."

    def __init__(self, errors=None, message=None):
        self.errors = errors or {}
        super().__init__(message)

    @classmethod
    def from_form(cls, form, message=None):
        return cls({field: list(errors) for field, errors in form.errors.items()}, message)


class DuplicateRegistrationError(PortalError):
    status_code = 409
    default_message = "A registration already exists with this mobile number."


class InvalidTransitionError(PortalError):
    status_code = 409
    default_message = "This status change is not allowed."


class NotFoundError(PortalError):
    status_code = 404
    default_message = "No record found with the provided details."


class AuthorizationError(PortalError):
    status_code = 403
    default_message = "Insufficient role."


class AuthenticationFailed(PortalError):
    status_code = 401
    default_message = "Invalid username or password."


class StoreError(PortalError):
    status_code = 503
    default_message = "The service is temporarily unavailable. Please try again."


@contextmanager
def store_errors(operation):
    """Re-raise database failures inside the block as StoreError.

    Errors that callers handle themselves (for example IntegrityError turned
    into DuplicateRegistrationError) must be caught inside the block.
    """
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Store failure during %s", operation)
        raise StoreError() from exc


def error_response(exc):
    payload = {'status': 'error', 'message': exc.message}
    if isinstance(exc, FieldValidationError) and exc.errors:
        payload['errors'] = exc.errors
    return JsonResponse(payload, status=exc.status_code)
