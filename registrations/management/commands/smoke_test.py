import secrets

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.test import Client
from django.urls import reverse

from accounts.models import AdminUser, Role


class Command(BaseCommand):
    help = 'Runs a smoke test to verify the public and panel endpoints respond'

    def add_arguments(self, parser):
        parser.add_argument(
            '--username', default='smoke_admin',
            help='Temporary super admin created for the run and deleted afterwards; must not already exist.',
        )

    def handle(self, *args, **options):
        if 'testserver' not in settings.ALLOWED_HOSTS:
            settings.ALLOWED_HOSTS = [*settings.ALLOWED_HOSTS, 'testserver']
        client = Client()
        failures = 0

        self.stdout.write(self.style.SUCCESS('Testing public endpoints...'))
        public_urls = [
            ('catalog:active_categories', {}),
            ('catalog:panchayath_options', {}),
            ('accounts:login', {}),
            ('registrations:check_status', {'q': '0000000000'}),
        ]
        for url_name, params in public_urls:
            failures += self._check(client, url_name, params, expected=(200, 404))

        username = options['username']
        if AdminUser.objects.filter(username=username).exists():
            raise CommandError(f'User "{username}" already exists; pass --username with an unused name.')

        password = secrets.token_urlsafe(24)
        user = AdminUser.objects.create_user(username, password, role=Role.SUPER_ADMIN)
        try:
            response = client.post(reverse('accounts:login'), {'username': username, 'password': password})
            if response.status_code != 200:
                raise CommandError(f'Login as {username} failed with status {response.status_code}')

            self.stdout.write(self.style.SUCCESS(f'\nTesting panel endpoints as {username}...'))
            panel_urls = [
                'accounts:home',
                'registrations:manage',
                'catalog:categories',
                'catalog:panchayaths',
                'insights:dashboard',
                'insights:export_registrations',
            ]
            for url_name in panel_urls:
                failures += self._check(client, url_name, {}, expected=(200,))

            client.post(reverse('accounts:logout'))
        finally:
            user.delete()

        if failures:
            raise CommandError(f'{failures} endpoint(s) failed')
        self.stdout.write(self.style.SUCCESS('\nAll endpoints responded'))

    def _check(self, client, url_name, params, expected):
        url = reverse(url_name)
        try:
            response = client.get(url, params)
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'✗ {url_name} - Error: {e}'))
            return 1
        if response.status_code in expected:
            self.stdout.write(self.style.SUCCESS(f'✓ {url_name} ({url}) - {response.status_code}'))
            return 0
        if response.status_code == 302:
            self.stdout.write(self.style.WARNING(f'⚠ {url_name} ({url}) - Redirected to {response.url}'))
        else:
            self.stdout.write(self.style.ERROR(f'✗ {url_name} ({url}) - Status: {response.status_code}'))
        return 1
