from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from apps.accounts.models import User, UserRole


def _run(*args):
    out = StringIO()
    call_command('create_admin', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestCreateAdminCommand:

    def test_creates_superadmin(self):
        output = _run('--login', 'chief', '--email', 'Chief@Example.com', '--password', 'secret1')

        user = User.objects.get(login='chief')
        assert user.role == UserRole.SUPERADMIN
        assert user.email == 'chief@example.com'
        assert user.is_staff
        assert user.check_password('secret1')
        assert 'Created' in output

    def test_creates_admin_role(self):
        _run('--login', 'writer', '--email', 'w@example.com', '--password', 'secret1', '--role', 'ADMIN')

        assert User.objects.get(login='writer').role == UserRole.ADMIN

    def test_promotes_existing_user(self, user):
        output = _run('--login', user.login, '--email', user.email, '--password', 'newpass1')

        user.refresh_from_db()
        assert user.role == UserRole.SUPERADMIN
        assert user.check_password('newpass1')
        assert 'Updated' in output

    def test_short_password_rejected(self):
        with pytest.raises(CommandError):
            _run('--login', 'chief', '--email', 'c@example.com', '--password', '123')
        assert not User.objects.filter(login='chief').exists()

    def test_email_taken_by_other_account(self, user):
        with pytest.raises(CommandError):
            _run('--login', 'someone', '--email', user.email.upper(), '--password', 'secret1')
