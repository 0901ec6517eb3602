import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Place, Route, Service


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular portal user."""
    return User.objects.create_user(
        login='tourist',
        email='tourist@example.com',
        password='TestPass123!',
        name='Test Tourist',
    )


@pytest.fixture
def other_user(db):
    """Create and return another regular user."""
    return User.objects.create_user(
        login='hiker',
        email='hiker@example.com',
        password='OtherPass123!',
        name='Other Hiker',
    )


@pytest.fixture
def banned_user(db):
    """Create and return a banned user."""
    return User.objects.create_user(
        login='banned',
        email='banned@example.com',
        password='TestPass123!',
        is_banned=True,
    )


@pytest.fixture
def admin_user(db):
    """Create and return a content administrator."""
    return User.objects.create_user(
        login='editor',
        email='editor@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
        is_staff=True,
    )


@pytest.fixture
def superadmin_user(db):
    """Create and return a super administrator."""
    return User.objects.create_superuser(
        login='root',
        email='root@example.com',
        password='RootPass123!',
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as the regular user."""
    return _client_for(user)


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as ADMIN."""
    return _client_for(admin_user)


@pytest.fixture
def superadmin_client(superadmin_user):
    """Return an API client authenticated as SUPERADMIN."""
    return _client_for(superadmin_user)


@pytest.fixture
def favorite_place(db):
    return Place.objects.create(title='Teberda Lake', slug='teberda-lake')


@pytest.fixture
def favorite_route(db):
    return Route.objects.create(title='Sophia Waterfalls', slug='sophia-waterfalls')


@pytest.fixture
def favorite_service(db):
    return Service.objects.create(title='Mountain Guide', slug='mountain-guide', category='Гид')


@pytest.fixture
def png_upload():
    """Small PNG file upload."""
    buffer = io.BytesIO()
    Image.new('RGB', (8, 8), (200, 30, 30)).save(buffer, 'PNG')
    return SimpleUploadedFile('avatar.png', buffer.getvalue(), content_type='image/png')


@pytest.fixture
def media_root(settings, tmp_path):
    """Store uploads in a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path
