from django.test import TestCase, Client
from django.urls import reverse

from accounts.models import ActivityLog, AdminUser, Role
from registrations import services
from registrations.models import Registration, StatusChange
from .test_registration import applicant


class RegistrationAdminTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.registration = services.submit_registration(applicant())

    def test_super_admin_approves_from_changelist(self):
        boss = AdminUser.objects.create_superuser('boss', 'password123')
        self.client.force_login(boss)

        response = self.client.get(reverse('admin:registrations_registration_approve', args=[self.registration.pk]))
        self.assertRedirects(response, reverse('admin:registrations_registration_changelist'), fetch_redirect_response=False)
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, 'approved')
        self.assertEqual(StatusChange.objects.get().changed_by, 'boss')

    def test_user_admin_cannot_reject(self):
        clerk = AdminUser.objects.create_user('clerk', 'password123', role=Role.USER_ADMIN)
        self.client.force_login(clerk)

        self.client.get(reverse('admin:registrations_registration_reject', args=[self.registration.pk]))
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, 'pending')

    def test_registrations_cannot_be_deleted(self):
        boss = AdminUser.objects.create_superuser('boss', 'password123')
        self.client.force_login(boss)
        response = self.client.post(reverse('admin:registrations_registration_delete', args=[self.registration.pk]), {'post': 'yes'})
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Registration.objects.filter(pk=self.registration.pk).exists())

    def test_change_form_only_corrects_category(self):
        boss = AdminUser.objects.create_superuser('boss', 'password123')
        self.client.force_login(boss)
        before = self.registration.updated_at

        response = self.client.post(reverse('admin:registrations_registration_change', args=[self.registration.pk]), {
            'category': 'OrganeLife',
            'name': 'Mallory',
            'mobile_number': '9000000000',
            'status': 'approved',
            'status_changes-TOTAL_FORMS': '0',
            'status_changes-INITIAL_FORMS': '0',
            'status_changes-MIN_NUM_FORMS': '0',
            'status_changes-MAX_NUM_FORMS': '1000',
        })
        self.assertRedirects(response, reverse('admin:registrations_registration_changelist'), fetch_redirect_response=False)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.category, 'OrganeLife')
        self.assertEqual(self.registration.name, 'Asha')
        self.assertEqual(self.registration.mobile_number, '9876543210')
        self.assertEqual(self.registration.status, 'pending')
        self.assertGreater(self.registration.updated_at, before)
        self.assertTrue(ActivityLog.objects.filter(action_type='UPDATE', affected_object='ESEP9876543210A').exists())

    def test_registrations_cannot_be_added(self):
        boss = AdminUser.objects.create_superuser('boss', 'password123')
        self.client.force_login(boss)
        response = self.client.get(reverse('admin:registrations_registration_add'))
        self.assertEqual(response.status_code, 403)
