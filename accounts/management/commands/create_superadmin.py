import getpass

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from accounts.models import ADMIN_PERMISSION_FLAGS, AdminAccount


class Command(BaseCommand):
    help = 'Create the bootstrap superadmin account (does nothing if it already exists)'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Superadmin email (default: SUPERADMIN_EMAIL setting)')
        parser.add_argument('--username', help='Superadmin username (default: SUPERADMIN_USERNAME setting)')
        parser.add_argument('--password', help='Password; prompted for when omitted')

    def handle(self, *args, **options):
        email = (options.get('email') or settings.SUPERADMIN_EMAIL).strip().lower()
        username = (options.get('username') or settings.SUPERADMIN_USERNAME).strip()

        existing = AdminAccount.objects.filter(email=email).first()
        if existing:
            self.stdout.write(self.style.WARNING(f'Superadmin {existing.username} <{email}> already exists.'))
            return

        if AdminAccount.objects.filter(username=username).exists():
            raise CommandError(f'Admin with username "{username}" already exists.')

        password = options.get('password')
        if not password:
            password = getpass.getpass('Password: ')
            if password != getpass.getpass('Password (again): '):
                raise CommandError('Passwords do not match.')
        if len(password) < 6:
            raise CommandError('Password must be at least 6 characters.')

        account = AdminAccount(username=username, email=email, role='superadmin')
        for flag in ADMIN_PERMISSION_FLAGS:
            setattr(account, flag, True)
        account.set_password(password)
        account.save()

        self.stdout.write(self.style.SUCCESS(f'Superadmin {username} created successfully!'))
