from unittest import mock

from django.db import OperationalError
from django.test import TestCase, override_settings

from registrations import services
from registrations.models import Registration, RegistrationStatus
from esep.exceptions import DuplicateRegistrationError, FieldValidationError, NotFoundError, StoreError


def applicant(**overrides):
    data = {
        'category': 'FarmeLife',
        'name': 'Asha',
        'address': 'Near temple, Kadavoor',
        'mobile_number': '9876543210',
        'panchayath': 'Kadavoor',
        'ward': '7',
        'agent_pro': '',
    }
    data.update(overrides)
    return data


class CustomerIdTests(TestCase):
    def test_derivation(self):
        self.assertEqual(services.derive_customer_id('9876543210', 'Asha'), 'ESEP9876543210A')
        self.assertEqual(services.derive_customer_id('9876543210', 'asha'), 'ESEP9876543210A')

    def test_deterministic(self):
        first = services.derive_customer_id('9123456780', 'Biju')
        self.assertEqual(first, services.derive_customer_id('9123456780', 'Biju'))

    @override_settings(CUSTOMER_ID_PREFIX='ELS')
    def test_prefix_from_settings(self):
        self.assertEqual(services.derive_customer_id('9876543210', 'Asha'), 'ELS9876543210A')


class SubmitRegistrationTests(TestCase):
    def test_new_registration_is_pending(self):
        registration = services.submit_registration(applicant())
        self.assertEqual(registration.customer_id, 'ESEP9876543210A')
        self.assertEqual(registration.status, RegistrationStatus.PENDING)
        self.assertEqual(registration.created_at, registration.updated_at)
        self.assertEqual(Registration.objects.count(), 1)

    def test_values_are_stripped(self):
        registration = services.submit_registration(applicant(name='  Asha  ', ward=' 7 '))
        self.assertEqual(registration.name, 'Asha')
        self.assertEqual(registration.ward, '7')

    def test_missing_fields(self):
        for field in ('category', 'name', 'address', 'mobile_number', 'panchayath', 'ward'):
            with self.subTest(field=field):
                with self.assertRaises(FieldValidationError) as ctx:
                    services.submit_registration(applicant(**{field: '   '}))
                self.assertIn(field, ctx.exception.errors)
        self.assertFalse(Registration.objects.exists())

    def test_agent_is_optional(self):
        data = applicant()
        del data['agent_pro']
        registration = services.submit_registration(data)
        self.assertEqual(registration.agent_pro, '')

    def test_malformed_mobile_number(self):
        for mobile in ('98765', '98765432101', '98765abcde', '+919876543', '٩٨٧٦٥٤٣٢١٠'):
            with self.subTest(mobile=mobile):
                with self.assertRaises(FieldValidationError) as ctx:
                    services.submit_registration(applicant(mobile_number=mobile))
                self.assertIn('mobile_number', ctx.exception.errors)

    def test_duplicate_mobile_any_status(self):
        first = services.submit_registration(applicant())
        Registration.objects.filter(pk=first.pk).update(status=RegistrationStatus.REJECTED)

        with self.assertRaises(DuplicateRegistrationError):
            services.submit_registration(applicant(name='Someone Else'))

        self.assertEqual(Registration.objects.count(), 1)
        first.refresh_from_db()
        self.assertEqual(first.name, 'Asha')
        self.assertEqual(first.status, RegistrationStatus.REJECTED)

    def test_unique_constraint_decides_a_race(self):
        services.submit_registration(applicant())
        # The pre-check misses the concurrent insert; the constraint still rejects it.
        with mock.patch.object(services, '_mobile_already_registered', side_effect=[False, True]):
            with self.assertRaises(DuplicateRegistrationError):
                services.submit_registration(applicant(name='Other'))
        self.assertEqual(Registration.objects.count(), 1)

    def test_store_failure(self):
        with mock.patch.object(services, '_mobile_already_registered', side_effect=OperationalError('db down')):
            with self.assertLogs('esep.exceptions', level='ERROR'):
                with self.assertRaises(StoreError):
                    services.submit_registration(applicant())


class LookupRegistrationTests(TestCase):
    def setUp(self):
        services.submit_registration(applicant())

    def test_by_mobile_number(self):
        self.assertEqual(services.lookup_registration('9876543210').customer_id, 'ESEP9876543210A')

    def test_by_customer_id_case_insensitive(self):
        self.assertEqual(services.lookup_registration('  esep9876543210a ').name, 'Asha')

    def test_blank_token(self):
        with self.assertRaises(FieldValidationError):
            services.lookup_registration('  ')

    def test_no_match(self):
        with self.assertRaises(NotFoundError):
            services.lookup_registration('1111111111')
        with self.assertRaises(NotFoundError):
            services.lookup_registration('ESEP0000000000X')

    def test_non_ascii_digits_are_not_a_mobile_number(self):
        with self.assertRaises(NotFoundError):
            services.lookup_registration('٩٨٧٦٥٤٣٢١٠')
        self.assertFalse(services.MOBILE_NUMBER_RE.fullmatch('٩٨٧٦٥٤٣٢١٠'))
