import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Place, Route, Service


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def catalog_admin(db):
    """Create and return a content administrator."""
    return User.objects.create_user(
        login='catalog-editor',
        email='catalog-editor@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def catalog_user(db):
    """Create and return a regular user."""
    return User.objects.create_user(
        login='catalog-tourist',
        email='catalog-tourist@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def catalog_admin_client(catalog_admin):
    """Return API client authenticated as ADMIN."""
    client = APIClient()
    refresh = RefreshToken.for_user(catalog_admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def catalog_user_client(catalog_user):
    """Return API client authenticated as a regular user."""
    client = APIClient()
    refresh = RefreshToken.for_user(catalog_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def lake(db):
    return Place.objects.create(
        title='Baduk Lakes',
        slug='baduk-lakes',
        location='Teberda',
        directions=['Домбай'],
        seasons=['лето', 'осень'],
        object_types=['озера/реки'],
        custom_filters={'housing': ['Кемпинг']},
        unique_views_count=5,
    )


@pytest.fixture
def waterfall(db):
    return Place.objects.create(
        title='Alibek Waterfall',
        slug='alibek-waterfall',
        location='Dombay',
        directions=['Домбай'],
        seasons=['лето'],
        object_types=['водопады'],
        unique_views_count=50,
    )


@pytest.fixture
def glacier(db):
    return Place.objects.create(
        title='Sofia Glacier',
        slug='sofia-glacier',
        directions=['Архыз'],
        seasons=['зима'],
        object_types=['ледники'],
    )


@pytest.fixture
def hidden_place(db):
    return Place.objects.create(title='Closed Cave', slug='closed-cave', is_active=False)


@pytest.fixture
def guide(db):
    return Service.objects.create(title='Aslan Guide', slug='aslan-guide', category='Гид')


@pytest.fixture
def second_guide(db):
    return Service.objects.create(title='Murat Guide', slug='murat-guide', category='Guide')


@pytest.fixture
def rental(db):
    return Service.objects.create(title='Ski Rental', slug='ski-rental', category='Прокат')


@pytest.fixture
def easy_route(db):
    return Route.objects.create(
        title='Easy Walk',
        slug='easy-walk',
        season='Лето',
        transport='Пешком',
        duration='Полдня',
        distance=6,
        difficulty=1,
        elevation_gain=200,
        is_family=True,
        unique_views_count=10,
    )


@pytest.fixture
def hard_route(db):
    return Route.objects.create(
        title='Hard Climb',
        slug='hard-climb',
        season='Зима',
        transport='Верхом',
        duration='2 дня',
        distance=60,
        difficulty=5,
        elevation_gain=1500,
        has_overnight=True,
        custom_filters={'housing': ['Палатка']},
        unique_views_count=3,
    )
