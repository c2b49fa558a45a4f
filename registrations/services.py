"""Registration intake, status lookup and the approval state machine.

Every mutating operation takes the acting ``AdminSession`` as its first
argument and checks it against the role hierarchy before touching the
database.
"""
import logging
import re
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.models import Role
from accounts.permissions import require_role, role_rank
from accounts.services import log_activity
from esep.exceptions import (
    DuplicateRegistrationError, FieldValidationError, InvalidTransitionError,
    NotFoundError, StoreError, store_errors,
)
from .forms import CategoryCorrectionForm, RegistrationForm
from .models import Registration, RegistrationStatus, StatusChange

logger = logging.getLogger(__name__)

MOBILE_NUMBER_RE = re.compile(r'[0-9]{10}')

TRANSITION_ROLE = Role.LOCAL_ADMIN

ALLOWED_TRANSITIONS = {
    RegistrationStatus.PENDING: frozenset({RegistrationStatus.APPROVED, RegistrationStatus.REJECTED}),
    RegistrationStatus.APPROVED: frozenset({RegistrationStatus.PENDING}),
    RegistrationStatus.REJECTED: frozenset({RegistrationStatus.PENDING}),
}

STATUS_MESSAGES = {
    RegistrationStatus.PENDING: (
        "Your registration is currently under review. You will be notified once "
        "the payment approval process is completed."
    ),
    RegistrationStatus.APPROVED: (
        "Congratulations! Your registration has been approved. You can now start "
        "your self-employment journey with E-LIFE SOCIETY."
    ),
    RegistrationStatus.REJECTED: (
        "Please contact our support team for more information or to resubmit "
        "your application with the required corrections."
    ),
}


# --- Identity & duplicate guard ---

def derive_customer_id(mobile_number, name):
    """Program prefix + mobile number + first letter of the name, upper-cased."""
    return f"{settings.CUSTOMER_ID_PREFIX}{mobile_number}{name[:1].upper()}"


def _mobile_already_registered(mobile_number):
    return Registration.objects.filter(mobile_number=mobile_number).exists()


def submit_registration(fields):
    """Validate and store a new pending registration.

    The existence check only saves a round trip; the unique constraint on
    ``mobile_number`` decides between concurrent submissions of one number.
    """
    form = RegistrationForm(fields)
    if not form.is_valid():
        raise FieldValidationError.from_form(form)

    mobile_number = form.cleaned_data['mobile_number']
    with store_errors('submit_registration'):
        if _mobile_already_registered(mobile_number):
            logger.warning("Duplicate registration attempt for mobile ending %s", mobile_number[-4:])
            raise DuplicateRegistrationError()

        registration = form.save(commit=False)
        registration.customer_id = derive_customer_id(mobile_number, form.cleaned_data['name'])
        registration.status = RegistrationStatus.PENDING
        registration.created_at = registration.updated_at = timezone.now()
        try:
            with transaction.atomic():
                registration.save(force_insert=True)
        except IntegrityError as exc:
            if _mobile_already_registered(mobile_number):
                logger.warning("Unique constraint rejected mobile ending %s", mobile_number[-4:])
                raise DuplicateRegistrationError() from exc
            logger.exception("Registration insert rejected for %s", registration.customer_id)
            raise StoreError() from exc

    logger.info("Registration %s submitted for category %s", registration.customer_id, registration.category)
    return registration


def lookup_registration(token):
    """Find a registration by 10-digit mobile number or by customer ID."""
    token = (token or '').strip()
    if not token:
        message = 'Please enter a customer ID or mobile number'
        raise FieldValidationError({'q': [message]}, message)

    with store_errors('lookup_registration'):
        if MOBILE_NUMBER_RE.fullmatch(token):
            registration = Registration.objects.filter(mobile_number=token).first()
        else:
            registration = Registration.objects.filter(customer_id=token.upper()).first()

    if registration is None:
        raise NotFoundError("No registration found with the provided details.")
    return registration


# --- State machine ---

def can_transition(current, target):
    if current not in RegistrationStatus.values or target not in RegistrationStatus.values:
        return False
    return RegistrationStatus(target) in ALLOWED_TRANSITIONS[RegistrationStatus(current)]


def reopen_min_role():
    role = Role.parse(settings.REOPEN_MIN_ROLE)
    if role is None:
        raise ImproperlyConfigured(
            f"REOPEN_MIN_ROLE must be one of {', '.join(Role.values)}, got {settings.REOPEN_MIN_ROLE!r}."
        )
    return role


def required_role_for(target):
    """Going back to pending needs the reopen role when it is stricter."""
    if target == RegistrationStatus.PENDING:
        reopen_role = reopen_min_role()
        if role_rank(reopen_role) > role_rank(TRANSITION_ROLE):
            return reopen_role
    return TRANSITION_ROLE


def next_timestamp(previous):
    now = timezone.now()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def _locked_registration(registration_id):
    try:
        return Registration.objects.select_for_update().get(pk=registration_id)
    except Registration.DoesNotExist:
        raise NotFoundError("Registration not found.")


def change_status(session, registration_id, target, reason=''):
    try:
        target = RegistrationStatus(target)
    except ValueError:
        raise FieldValidationError({'status': ['Select a valid status.']}, 'Select a valid status.')
    require_role(session, required_role_for(target))

    with store_errors('change_status'), transaction.atomic():
        registration = _locked_registration(registration_id)
        current = RegistrationStatus(registration.status)
        if not can_transition(current, target):
            raise InvalidTransitionError(f"Cannot change status from {current.label} to {target.label}.")

        registration.status = target
        registration.updated_at = next_timestamp(registration.updated_at)
        registration.save(update_fields=['status', 'updated_at'])

        StatusChange.objects.create(
            registration=registration,
            from_status=current,
            to_status=target,
            changed_by=session.username,
            reason=reason or '',
            changed_at=registration.updated_at,
        )
        log_activity(
            session,
            f"Changed status of {registration.customer_id} from {current} to {target}",
            action_type='STATUS',
            affected_object=registration.customer_id,
        )

    logger.info("Registration %s: %s -> %s by %s", registration.customer_id, current, target, session.username)
    return registration


def approve(session, registration_id):
    return change_status(session, registration_id, RegistrationStatus.APPROVED)


def reject(session, registration_id, reason=''):
    return change_status(session, registration_id, RegistrationStatus.REJECTED, reason)


def reopen(session, registration_id, reason):
    """Send an approved or rejected registration back to review, recording why."""
    require_role(session, required_role_for(RegistrationStatus.PENDING))
    reason = (reason or '').strip()
    if not reason:
        message = 'A reason is required to reopen a registration.'
        raise FieldValidationError({'reason': [message]}, message)
    return change_status(session, registration_id, RegistrationStatus.PENDING, reason)


def correct_category(session, registration_id, category):
    """Fix the category of a registration. Not a status transition."""
    require_role(session, TRANSITION_ROLE)
    form = CategoryCorrectionForm({'category': category})
    if not form.is_valid():
        raise FieldValidationError.from_form(form, 'Please select a category')
    category = form.cleaned_data['category']

    with store_errors('correct_category'), transaction.atomic():
        registration = _locked_registration(registration_id)
        previous = registration.category
        registration.category = category
        registration.updated_at = next_timestamp(registration.updated_at)
        registration.save(update_fields=['category', 'updated_at'])
        log_activity(
            session,
            f"Changed category of {registration.customer_id} from {previous} to {category}",
            action_type='UPDATE',
            affected_object=registration.customer_id,
        )

    logger.info("Registration %s category %s -> %s by %s", registration.customer_id, previous, category, session.username)
    return registration
