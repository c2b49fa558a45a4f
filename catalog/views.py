from django.http import JsonResponse
from django.shortcuts import redirect
from django.conf import settings
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.models import Role
from accounts.permissions import role_required
from esep.exceptions import AuthorizationError, PortalError, error_response
from . import services


def category_payload(category):
    return {
        'id': category.id,
        'name': category.name,
        'description': category.description,
        'actual_fee': str(category.actual_fee),
        'offer_fee': str(category.offer_fee),
        'fee_label': category.fee_label,
        'has_discount': category.has_discount,
        'image_url': category.image_url,
        'popup_image_url': category.popup_image_url,
        'is_active': category.is_active,
    }


def panchayath_payload(panchayath):
    return {
        'id': panchayath.id,
        'name': panchayath.name,
        'district': panchayath.district,
        'label': str(panchayath),
    }


def _run(operation, *args):
    try:
        return operation(*args), None
    except AuthorizationError:
        return None, redirect(settings.ADMIN_FORBIDDEN_REDIRECT_URL)
    except PortalError as e:
        return None, error_response(e)


# --- Public selectors for the registration form ---

@ensure_csrf_cookie
@require_GET
def active_categories(request):
    categories = services.list_categories(active_only=True)
    return JsonResponse({'status': 'success', 'categories': [category_payload(c) for c in categories]})


@ensure_csrf_cookie
@require_GET
def panchayath_options(request):
    panchayaths = services.list_panchayaths()
    return JsonResponse({'status': 'success', 'panchayaths': [panchayath_payload(p) for p in panchayaths]})


# --- Category management ---

@role_required(Role.LOCAL_ADMIN)
@require_http_methods(['GET', 'POST'])
def categories(request):
    if request.method == 'POST':
        category, failure = _run(services.create_category, request.admin_session, request.POST)
        if failure:
            return failure
        return JsonResponse({'status': 'success', 'message': 'Category added successfully', 'category': category_payload(category)}, status=201)

    return JsonResponse({'status': 'success', 'categories': [category_payload(c) for c in services.list_categories()]})


@role_required(Role.LOCAL_ADMIN)
@require_POST
def category_update(request, category_id):
    category, failure = _run(services.update_category, request.admin_session, category_id, request.POST)
    if failure:
        return failure
    return JsonResponse({'status': 'success', 'message': 'Category updated successfully', 'category': category_payload(category)})


@role_required(Role.LOCAL_ADMIN)
@require_POST
def category_toggle(request, category_id):
    category, failure = _run(services.toggle_category, request.admin_session, category_id)
    if failure:
        return failure
    state = 'activated' if category.is_active else 'deactivated'
    return JsonResponse({'status': 'success', 'message': f'Category {state} successfully', 'category': category_payload(category)})


# --- Panchayath management ---

@role_required(Role.LOCAL_ADMIN)
@require_http_methods(['GET', 'POST'])
def panchayaths(request):
    if request.method == 'POST':
        panchayath, failure = _run(services.create_panchayath, request.admin_session, request.POST)
        if failure:
            return failure
        return JsonResponse({'status': 'success', 'message': 'Panchayath added successfully', 'panchayath': panchayath_payload(panchayath)}, status=201)

    return JsonResponse({'status': 'success', 'panchayaths': [panchayath_payload(p) for p in services.list_panchayaths()]})


@role_required(Role.LOCAL_ADMIN)
@require_POST
def panchayath_update(request, panchayath_id):
    panchayath, failure = _run(services.update_panchayath, request.admin_session, panchayath_id, request.POST)
    if failure:
        return failure
    return JsonResponse({'status': 'success', 'message': 'Panchayath updated successfully', 'panchayath': panchayath_payload(panchayath)})


@role_required(Role.LOCAL_ADMIN)
@require_POST
def panchayath_delete(request, panchayath_id):
    _, failure = _run(services.delete_panchayath, request.admin_session, panchayath_id)
    if failure:
        return failure
    return JsonResponse({'status': 'success', 'message': 'Panchayath deleted successfully'})
