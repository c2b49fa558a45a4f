from django.core.management.base import BaseCommand, CommandError

from accounts.models import AdminUser, Role


class Command(BaseCommand):
    help = 'Creates an administrator account, or updates the password and role of an existing one'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('password')
        parser.add_argument('--role', default=Role.LOCAL_ADMIN, choices=Role.values)

    def handle(self, *args, **options):
        username = options['username'].strip()
        if not username:
            raise CommandError('Username must not be blank.')

        user = AdminUser.objects.filter(username=username).first()
        if user is None:
            AdminUser.objects.create_user(username, options['password'], role=options['role'])
            self.stdout.write(self.style.SUCCESS(f"Created {options['role']} '{username}'"))
            return

        user.role = options['role']
        user.set_password(options['password'])
        user.save()
        self.stdout.write(self.style.WARNING(f"Updated existing admin '{username}' ({options['role']})"))
