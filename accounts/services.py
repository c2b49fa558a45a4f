import logging

from django.contrib.auth import authenticate, login as auth_login, logout as auth_logout

from esep.exceptions import AuthenticationFailed
from .models import ActivityLog, Role
from .permissions import SESSION_KEY, AdminSession, get_admin_session

logger = logging.getLogger(__name__)


def log_activity(session, action, action_type='UPDATE', affected_object='', request=None):
    """Record an administrative action in the audit log."""
    ActivityLog.objects.create(
        actor_username=session.username,
        action=action,
        action_type=action_type,
        affected_object=str(affected_object)[:255],
        ip_address=request.META.get('REMOTE_ADDR') if request is not None else None,
        path=request.path if request is not None else '',
    )


def login_admin(request, username, password):
    """Authenticate an administrator and establish the session value."""
    user = authenticate(request, username=username, password=password)
    if user is None:
        logger.warning("Failed admin login for username %r", username)
        raise AuthenticationFailed()

    auth_login(request, user)
    session = AdminSession(username=user.get_username(), role=Role(user.role))
    request.session[SESSION_KEY] = session.to_dict()
    log_activity(session, "Logged in", action_type='LOGIN', request=request)
    logger.info("Admin %s logged in as %s", session.username, session.role)
    return session


def logout_admin(request):
    """Tear down the administrator session. Safe to call when already logged out."""
    session = get_admin_session(request)
    if session is not None:
        log_activity(session, "Logged out", action_type='LOGOUT', request=request)
        logger.info("Admin %s logged out", session.username)
    request.session.pop(SESSION_KEY, None)
    auth_logout(request)
