from django.contrib import admin, messages
from django.shortcuts import redirect
from django.urls import path, reverse
from django.utils.html import format_html

from accounts.permissions import AdminSession
from esep.exceptions import PortalError
from . import services
from .models import Registration, RegistrationStatus, StatusChange


class StatusChangeInline(admin.TabularInline):
    model = StatusChange
    extra = 0
    can_delete = False
    readonly_fields = ('from_status', 'to_status', 'changed_by', 'reason', 'changed_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('customer_id', 'name', 'mobile_number', 'category', 'panchayath', 'status', 'created_at', 'actions_buttons')
    list_filter = ('status', 'category', 'panchayath', 'created_at')
    search_fields = ('customer_id', 'name', 'mobile_number', 'agent_pro')
    # category is the only field an administrator may correct
    readonly_fields = (
        'customer_id', 'name', 'address', 'mobile_number', 'panchayath', 'ward', 'agent_pro',
        'status', 'created_at', 'updated_at',
    )
    inlines = [StatusChangeInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        if 'category' not in form.changed_data:
            return
        try:
            services.correct_category(AdminSession.for_user(request.user), obj.pk, obj.category)
        except PortalError as e:
            messages.error(request, e.message)

    def actions_buttons(self, obj):
        if obj.status == RegistrationStatus.PENDING:
            return format_html(
                '<a class="button" href="{}">Approve</a>&nbsp;'
                '<a class="button" href="{}" style="background-color:red;">Reject</a>',
                reverse(f'{self.admin_site.name}:registrations_registration_approve', args=[obj.pk]),
                reverse(f'{self.admin_site.name}:registrations_registration_reject', args=[obj.pk]),
            )
        return obj.get_status_display()
    actions_buttons.short_description = 'Actions'

    def get_urls(self):
        urls = super().get_urls()
        custom_urls = [
            path('approve/<int:pk>/', self.admin_site.admin_view(self.approve_registration), name='registrations_registration_approve'),
            path('reject/<int:pk>/', self.admin_site.admin_view(self.reject_registration), name='registrations_registration_reject'),
        ]
        return custom_urls + urls

    def _transition(self, request, pk, operation, done):
        session = AdminSession.for_user(request.user)
        try:
            registration = operation(session, pk)
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, f"Registration {registration.customer_id} {done}.")
        return redirect(f'{self.admin_site.name}:registrations_registration_changelist')

    def approve_registration(self, request, pk):
        return self._transition(request, pk, services.approve, 'approved')

    def reject_registration(self, request, pk):
        return self._transition(request, pk, services.reject, 'rejected')


@admin.register(StatusChange)
class StatusChangeAdmin(admin.ModelAdmin):
    list_display = ('registration', 'from_status', 'to_status', 'changed_by', 'changed_at')
    list_filter = ('to_status', 'changed_by')
    search_fields = ('registration__customer_id', 'changed_by', 'reason')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
