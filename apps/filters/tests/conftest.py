import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Place, Route


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def filters_admin(db):
    """Create and return a content administrator."""
    return User.objects.create_user(
        login='filters-editor',
        email='filters-editor@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def filters_user(db):
    """Create and return a regular user."""
    return User.objects.create_user(
        login='filters-tourist',
        email='filters-tourist@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def filters_admin_client(filters_admin):
    """Return API client authenticated as ADMIN."""
    client = APIClient()
    refresh = RefreshToken.for_user(filters_admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def filters_user_client(filters_user):
    """Return API client authenticated as a regular user."""
    client = APIClient()
    refresh = RefreshToken.for_user(filters_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def arkhyz_place(db):
    return Place.objects.create(
        title='Sofia Lakes',
        slug='sofia-lakes',
        directions=['Архыз', 'Домбай'],
        seasons=['лето'],
        custom_filters={'housing': ['Кемпинг', 'Отель']},
    )


@pytest.fixture
def dombay_place(db):
    return Place.objects.create(
        title='Mussa-Achitara',
        slug='mussa-achitara',
        directions=['Домбай'],
        seasons=['зима', 'лето'],
        custom_filters={'housing': ['Отель']},
    )


@pytest.fixture
def horse_route(db):
    return Route.objects.create(
        title='Horse Trail',
        slug='horse-trail',
        season='Лето',
        transport='Верхом',
        custom_filters={'housing': ['Кемпинг']},
    )


@pytest.fixture
def walking_route(db):
    return Route.objects.create(
        title='Walking Trail',
        slug='walking-trail',
        season='Зима',
        transport='Пешком',
    )
