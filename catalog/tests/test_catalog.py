from decimal import Decimal

from django.core.management import call_command
from django.test import TestCase, Client
from django.urls import reverse

from accounts.models import ActivityLog, AdminUser, Role
from accounts.permissions import AdminSession
from catalog import services
from catalog.models import Category, Panchayath
from esep.exceptions import AuthorizationError, FieldValidationError, NotFoundError


class CategoryModelTests(TestCase):
    def test_fee_label_and_discount(self):
        free = Category(name='Job Card', description='x', actual_fee=Decimal('0'), offer_fee=Decimal('0'))
        paid = Category(name='FarmeLife', description='x', actual_fee=Decimal('1000.00'), offer_fee=Decimal('500.00'))
        self.assertEqual(free.fee_label, 'FREE')
        self.assertFalse(free.has_discount)
        self.assertEqual(paid.fee_label, '₹500.00')
        self.assertTrue(paid.has_discount)


class CategoryServiceTests(TestCase):
    def setUp(self):
        self.local = AdminSession('local', Role.LOCAL_ADMIN)
        self.clerk = AdminSession('clerk', Role.USER_ADMIN)
        self.data = {'name': 'FarmeLife', 'description': 'Farming', 'actual_fee': '1000', 'offer_fee': '500'}

    def test_create_defaults_to_active(self):
        category = services.create_category(self.local, self.data)
        self.assertTrue(category.is_active)
        self.assertEqual(category.offer_fee, Decimal('500'))
        self.assertTrue(ActivityLog.objects.filter(actor_username='local', action_type='CREATE').exists())

    def test_create_requires_local_admin(self):
        with self.assertRaises(AuthorizationError):
            services.create_category(self.clerk, self.data)
        self.assertFalse(Category.objects.exists())

    def test_duplicate_name_is_a_field_error(self):
        services.create_category(self.local, self.data)
        with self.assertRaises(FieldValidationError) as ctx:
            services.create_category(self.local, self.data)
        self.assertIn('name', ctx.exception.errors)

    def test_negative_fee_rejected(self):
        with self.assertRaises(FieldValidationError) as ctx:
            services.create_category(self.local, {**self.data, 'actual_fee': '-1'})
        self.assertIn('actual_fee', ctx.exception.errors)

    def test_partial_update_keeps_other_fields(self):
        category = services.create_category(self.local, self.data)
        services.toggle_category(self.local, category.id)
        updated = services.update_category(self.local, category.id, {'offer_fee': '250'})
        self.assertEqual(updated.offer_fee, Decimal('250'))
        self.assertEqual(updated.name, 'FarmeLife')
        self.assertFalse(updated.is_active)

    def test_toggle_hides_from_active_list(self):
        category = services.create_category(self.local, self.data)
        services.toggle_category(self.local, category.id)
        self.assertEqual(services.list_categories(active_only=True), [])
        self.assertEqual(services.list_categories(), [category])

    def test_unknown_category(self):
        with self.assertRaises(NotFoundError):
            services.toggle_category(self.local, 999)


class PanchayathServiceTests(TestCase):
    def setUp(self):
        self.local = AdminSession('local', Role.LOCAL_ADMIN)

    def test_crud(self):
        panchayath = services.create_panchayath(self.local, {'name': 'Chavara', 'district': 'Kollam'})
        services.update_panchayath(self.local, panchayath.id, {'name': 'Chavara South'})
        panchayath.refresh_from_db()
        self.assertEqual(str(panchayath), 'Chavara South - Kollam')

        services.delete_panchayath(self.local, panchayath.id)
        self.assertFalse(Panchayath.objects.exists())
        self.assertTrue(ActivityLog.objects.filter(action_type='DELETE').exists())

    def test_district_required(self):
        with self.assertRaises(FieldValidationError) as ctx:
            services.create_panchayath(self.local, {'name': 'Kundara'})
        self.assertIn('district', ctx.exception.errors)


class CatalogViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.password = 'password123'
        AdminUser.objects.create_user('local', self.password, role=Role.LOCAL_ADMIN)
        AdminUser.objects.create_user('clerk', self.password, role=Role.USER_ADMIN)
        call_command('seed_reference_data', verbosity=0)

    def login(self, username):
        self.client.post(reverse('accounts:login'), {'username': username, 'password': self.password})

    def test_public_options(self):
        Category.objects.filter(name='EntreLife').update(is_active=False)
        response = self.client.get(reverse('catalog:active_categories'))
        names = [c['name'] for c in response.json()['categories']]
        self.assertEqual(names, ['FarmeLife', 'FoodeLife', 'Job Card', 'OrganeLife'])

        response = self.client.get(reverse('catalog:panchayath_options'))
        labels = [p['label'] for p in response.json()['panchayaths']]
        self.assertEqual(labels[0], 'Chavara - Kollam')
        self.assertEqual(len(labels), 4)

    def test_create_and_toggle_through_panel(self):
        self.login('local')
        response = self.client.post(reverse('catalog:categories'), {
            'name': 'TechLife', 'description': 'Digital services', 'actual_fee': '800', 'offer_fee': '800',
        })
        self.assertEqual(response.status_code, 201)
        category_id = response.json()['category']['id']

        response = self.client.post(reverse('catalog:category_toggle', args=[category_id]))
        self.assertFalse(response.json()['category']['is_active'])

    def test_validation_error_payload(self):
        self.login('local')
        response = self.client.post(reverse('catalog:panchayaths'), {'name': ''})
        self.assertEqual(response.status_code, 400)
        self.assertIn('name', response.json()['errors'])

    def test_user_admin_is_redirected(self):
        self.login('clerk')
        response = self.client.post(reverse('catalog:panchayaths'), {'name': 'X', 'district': 'Y'})
        self.assertRedirects(response, reverse('accounts:home'), fetch_redirect_response=False)
        self.assertEqual(Panchayath.objects.count(), 4)
