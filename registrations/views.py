from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from accounts.models import Role
from accounts.permissions import role_required
from esep.exceptions import AuthorizationError, PortalError, error_response
from insights.filters import RegistrationFilter, facets, filter_registrations, load_snapshot
from insights.services import DashboardService
from . import services
from .models import RegistrationStatus


def status_payload(registration):
    return {
        'customer_id': registration.customer_id,
        'name': registration.name,
        'category': registration.category,
        'panchayath': registration.panchayath,
        'ward': registration.ward,
        'status': registration.status,
        'status_display': registration.get_status_display(),
        'status_message': services.STATUS_MESSAGES[RegistrationStatus(registration.status)],
        'created_at': registration.created_at.isoformat(),
        'updated_at': registration.updated_at.isoformat(),
    }


def _admin_call(operation, *args):
    try:
        return operation(*args), None
    except AuthorizationError:
        return None, redirect(settings.ADMIN_FORBIDDEN_REDIRECT_URL)
    except PortalError as e:
        return None, error_response(e)


# --- Public ---

@csrf_exempt
@require_POST
def submit(request):
    try:
        registration = services.submit_registration(request.POST)
    except PortalError as e:
        return error_response(e)

    return JsonResponse({
        'status': 'success',
        'message': f'Registration submitted successfully! Your Customer ID is {registration.customer_id}',
        'customer_id': registration.customer_id,
        'registration_status': registration.status,
    }, status=201)


@require_GET
def check_status(request):
    try:
        registration = services.lookup_registration(request.GET.get('q', ''))
    except PortalError as e:
        return error_response(e)
    return JsonResponse({'status': 'success', 'registration': status_payload(registration)})


# --- Administration ---

@role_required(Role.LOCAL_ADMIN)
@require_GET
def manage(request):
    criteria = RegistrationFilter.from_query(request.GET)
    try:
        snapshot = load_snapshot()
    except PortalError as e:
        return error_response(e)

    records = filter_registrations(snapshot, criteria)
    return JsonResponse({
        'status': 'success',
        'filters': criteria.criteria(),
        'facets': facets(snapshot),
        'summary': DashboardService.summarize(records),
        'registrations': [record.as_dict() for record in records],
    })


@role_required(Role.LOCAL_ADMIN)
@require_POST
def change_status(request, registration_id):
    registration, failure = _admin_call(
        services.change_status,
        request.admin_session,
        registration_id,
        request.POST.get('status', ''),
        request.POST.get('reason', ''),
    )
    if failure:
        return failure
    return JsonResponse({
        'status': 'success',
        'message': f'Registration {registration.get_status_display().lower()} successfully',
        'registration': registration.as_dict(),
    })


@role_required(Role.LOCAL_ADMIN)
@require_POST
def reopen(request, registration_id):
    registration, failure = _admin_call(
        services.reopen, request.admin_session, registration_id, request.POST.get('reason', ''),
    )
    if failure:
        return failure
    return JsonResponse({
        'status': 'success',
        'message': 'Registration moved back to pending review',
        'registration': registration.as_dict(),
    })


@role_required(Role.LOCAL_ADMIN)
@require_POST
def correct_category(request, registration_id):
    registration, failure = _admin_call(
        services.correct_category, request.admin_session, registration_id, request.POST.get('category', ''),
    )
    if failure:
        return failure
    return JsonResponse({
        'status': 'success',
        'message': 'Category updated successfully',
        'registration': registration.as_dict(),
    })
