from django.http import JsonResponse
from django.urls import reverse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods, require_POST

from esep.exceptions import AuthenticationFailed, error_response
from .forms import LoginForm
from .models import Role
from .permissions import check_access, get_admin_session, role_required
from .services import login_admin, logout_admin


# (section, minimum role, url name) shown on the panel home
PANEL_SECTIONS = (
    ('dashboard', Role.SUPER_ADMIN, 'insights:dashboard'),
    ('registrations', Role.LOCAL_ADMIN, 'registrations:manage'),
    ('categories', Role.LOCAL_ADMIN, 'catalog:categories'),
    ('panchayaths', Role.LOCAL_ADMIN, 'catalog:panchayaths'),
)


@ensure_csrf_cookie
@require_http_methods(['GET', 'POST'])
def login_view(request):
    if request.method == 'GET':
        session = get_admin_session(request)
        if session is not None:
            return JsonResponse({'status': 'success', 'authenticated': True, **session.to_dict()})
        return JsonResponse({'status': 'login_required', 'authenticated': False})

    form = LoginForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'status': 'error', 'message': 'Username and password are required.'}, status=400)

    try:
        session = login_admin(request, form.cleaned_data['username'], form.cleaned_data['password'])
    except AuthenticationFailed as e:
        return error_response(e)

    return JsonResponse({
        'status': 'success',
        'authenticated': True,
        'redirect': reverse('accounts:home'),
        **session.to_dict(),
    })


@require_POST
def logout_view(request):
    logout_admin(request)
    return JsonResponse({'status': 'success', 'authenticated': False})


@role_required(Role.USER_ADMIN)
def panel_home(request):
    session = request.admin_session
    sections = [
        {
            'name': name,
            'url': reverse(url_name),
            'allowed': check_access(session, min_role),
        }
        for name, min_role, url_name in PANEL_SECTIONS
    ]
    return JsonResponse({
        'status': 'success',
        'username': session.username,
        'role': session.role.value,
        'role_display': session.role.label,
        'sections': sections,
    })
