from django.http import JsonResponse
from django.views.decorators.http import require_GET

from accounts.models import Role
from accounts.permissions import role_required
from accounts.services import log_activity
from esep.exceptions import PortalError, error_response
from .filters import RegistrationFilter, filter_registrations, load_snapshot
from .reporting import build_export_response
from .services import DashboardService


@role_required(Role.SUPER_ADMIN)
@require_GET
def dashboard(request):
    try:
        records = load_snapshot()
        stats = DashboardService.get_stats(records)
    except PortalError as e:
        return error_response(e)
    return JsonResponse({
        'status': 'success',
        'stats': stats,
        'categories': DashboardService.get_category_breakdown(records),
    })


@role_required(Role.LOCAL_ADMIN)
@require_GET
def export_registrations(request):
    criteria = RegistrationFilter.from_query(request.GET)
    try:
        records = filter_registrations(load_snapshot(), criteria)
    except PortalError as e:
        return error_response(e)

    response = build_export_response(records)
    log_activity(
        request.admin_session,
        f"Exported {len(records)} registrations",
        action_type='EXPORT',
        affected_object=', '.join(f"{k}={v}" for k, v in criteria.criteria().items()) or 'all',
        request=request,
    )
    return response
