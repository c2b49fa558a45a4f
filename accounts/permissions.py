"""Role hierarchy checks and the per-request administrator session.

The acting administrator is represented by an explicit ``AdminSession``
value. Views obtain it with ``get_admin_session(request)`` and pass it into
every service call that mutates data; services never look at the request.
"""
import logging
from dataclasses import dataclass
from functools import wraps

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from esep.exceptions import AuthorizationError
from .models import Role

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_auth'


@dataclass(frozen=True)
class AdminSession:
    username: str
    role: Role

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return None
        role = Role.parse(data.get('role'))
        username = data.get('username')
        if role is None or not username:
            return None
        return cls(username=username, role=role)

    def to_dict(self):
        return {'username': self.username, 'role': self.role.value}

    @classmethod
    def for_user(cls, user):
        role = Role.parse(getattr(user, 'role', None))
        if role is None or not user.is_authenticated:
            return None
        return cls(username=user.get_username(), role=role)


def role_rank(role):
    """Total ranking over roles; anything that is not a Role ranks 0."""
    role = Role.parse(role)
    return role.rank if role is not None else 0


def check_access(actor, required_role):
    """Return True when ``actor`` may perform an action needing ``required_role``.

    ``actor`` may be an AdminSession, a Role, a role string or None. An absent
    or unrecognised actor is always denied.
    """
    actor_role = actor.role if isinstance(actor, AdminSession) else Role.parse(actor)
    if actor_role is None:
        return False
    return role_rank(actor_role) >= role_rank(Role(required_role))


def require_role(session, required_role):
    if not check_access(session, required_role):
        raise AuthorizationError()
    return session


def get_admin_session(request):
    """Read the stored administrator session for ``request``, or None."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    session = AdminSession.from_dict(request.session.get(SESSION_KEY))
    if session is None or session.username != user.get_username():
        return None
    return session


def role_required(required_role):
    """View decorator gating access on the administrator role hierarchy.

    Anonymous visitors are sent to the login page; signed in administrators
    below ``required_role`` are redirected to the panel home.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            session = get_admin_session(request)
            if session is None:
                return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)
            if not check_access(session, required_role):
                logger.info("Denied %s (%s) access to %s", session.username, session.role, request.path)
                return redirect(settings.ADMIN_FORBIDDEN_REDIRECT_URL)
            request.admin_session = session
            return view_func(request, *args, **kwargs)
        return _wrapped_view
    return decorator
