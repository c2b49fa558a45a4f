import logging

from django.forms.models import model_to_dict

from accounts.models import Role
from accounts.permissions import require_role
from accounts.services import log_activity
from esep.exceptions import FieldValidationError, NotFoundError, store_errors
from .forms import CategoryForm, PanchayathForm
from .models import Category, Panchayath

logger = logging.getLogger(__name__)

MANAGE_ROLE = Role.LOCAL_ADMIN


def _merged_data(form_class, instance, data):
    # Fields missing from ``data`` keep their stored value.
    merged = model_to_dict(instance, fields=form_class.Meta.fields)
    for field in form_class.Meta.fields:
        if field in data:
            merged[field] = data.get(field)
    return merged


def _save_form(form, operation):
    if not form.is_valid():
        raise FieldValidationError.from_form(form)
    with store_errors(operation):
        return form.save()


def _get_or_404(model, pk):
    try:
        return model.objects.get(pk=pk)
    except model.DoesNotExist:
        raise NotFoundError(f"{model._meta.verbose_name.title()} not found.")


# --- Categories ---

def list_categories(active_only=False):
    qs = Category.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    return list(qs.order_by('name'))


def create_category(session, data):
    require_role(session, MANAGE_ROLE)
    data = {key: data.get(key) for key in data}
    data.setdefault('is_active', True)
    category = _save_form(CategoryForm(data), 'create_category')
    log_activity(session, f"Added category {category.name}", action_type='CREATE', affected_object=category)
    logger.info("Category %s created by %s", category.name, session.username)
    return category


def update_category(session, category_id, data):
    require_role(session, MANAGE_ROLE)
    category = _get_or_404(Category, category_id)
    old_name = category.name
    form = CategoryForm(_merged_data(CategoryForm, category, data), instance=category)
    category = _save_form(form, 'update_category')
    action = f"Updated category {category.name}"
    if old_name != category.name:
        action = f"Renamed category {old_name} to {category.name}"
    log_activity(session, action, action_type='UPDATE', affected_object=category)
    return category


def toggle_category(session, category_id):
    """Flip ``is_active``. Categories are never deleted, only deactivated."""
    require_role(session, MANAGE_ROLE)
    category = _get_or_404(Category, category_id)
    category.is_active = not category.is_active
    with store_errors('toggle_category'):
        category.save(update_fields=['is_active'])
    state = 'activated' if category.is_active else 'deactivated'
    log_activity(session, f"Category {category.name} {state}", action_type='UPDATE', affected_object=category)
    logger.info("Category %s %s by %s", category.name, state, session.username)
    return category


# --- Panchayaths ---

def list_panchayaths():
    return list(Panchayath.objects.order_by('name'))


def create_panchayath(session, data):
    require_role(session, MANAGE_ROLE)
    panchayath = _save_form(PanchayathForm(data), 'create_panchayath')
    log_activity(session, f"Added panchayath {panchayath}", action_type='CREATE', affected_object=panchayath)
    return panchayath


def update_panchayath(session, panchayath_id, data):
    require_role(session, MANAGE_ROLE)
    panchayath = _get_or_404(Panchayath, panchayath_id)
    form = PanchayathForm(_merged_data(PanchayathForm, panchayath, data), instance=panchayath)
    panchayath = _save_form(form, 'update_panchayath')
    log_activity(session, f"Updated panchayath {panchayath}", action_type='UPDATE', affected_object=panchayath)
    return panchayath


def delete_panchayath(session, panchayath_id):
    """Hard delete. Registrations store the panchayath name by value and are unaffected."""
    require_role(session, MANAGE_ROLE)
    panchayath = _get_or_404(Panchayath, panchayath_id)
    label = str(panchayath)
    with store_errors('delete_panchayath'):
        panchayath.delete()
    log_activity(session, f"Deleted panchayath {label}", action_type='DELETE', affected_object=label)
    logger.info("Panchayath %s deleted by %s", label, session.username)
