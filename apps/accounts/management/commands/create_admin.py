"""
Management command to create (or promote) a portal administrator.

Usage:
    python manage.py create_admin --login admin --email admin@example.com --password secret
    python manage.py create_admin --login editor --email e@example.com --password secret --role ADMIN
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.accounts.models import User, UserRole


class Command(BaseCommand):
    help = 'Create a SUPERADMIN (or ADMIN) account, or promote an existing one'

    def add_arguments(self, parser):
        parser.add_argument('--login', required=True)
        parser.add_argument('--email', required=True)
        parser.add_argument('--password', required=True)
        parser.add_argument('--name', default='')
        parser.add_argument(
            '--role',
            default=UserRole.SUPERADMIN,
            choices=[UserRole.ADMIN, UserRole.SUPERADMIN],
        )

    @transaction.atomic
    def handle(self, *args, **options):
        login = options['login'].strip()
        email = options['email'].strip().lower()
        role = options['role']

        if len(options['password']) < 6:
            raise CommandError('Password must be at least 6 characters long')

        user = User.objects.filter(login=login).first()
        if user is None and User.objects.filter(email__iexact=email).exists():
            raise CommandError(f'Email {email} belongs to another account')

        if user is not None:
            user.role = role
            user.is_staff = True
            user.is_banned = False
            user.set_password(options['password'])
            user.save()
            self.stdout.write(self.style.WARNING(f'Updated existing user {login} to {role}'))
            return

        User.objects.create_user(
            login=login,
            email=email,
            password=options['password'],
            name=options['name'] or login,
            role=role,
            is_staff=True,
        )
        self.stdout.write(self.style.SUCCESS(f'Created {role} {login} ({email})'))
