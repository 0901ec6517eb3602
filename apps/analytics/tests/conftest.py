import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Place, Route, Service
from apps.content.models import News
from apps.reviews.models import Review, ReviewStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def analytics_user(db):
    """Create a regular visitor account."""
    return User.objects.create_user(
        login='analytics-user',
        email='analytics_user@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def analytics_admin(db):
    """Create a content administrator."""
    return User.objects.create_user(
        login='analytics-admin',
        email='analytics_admin@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def analytics_user_client(analytics_user):
    """Return API client authenticated as the regular user."""
    client = APIClient()
    refresh = RefreshToken.for_user(analytics_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def analytics_admin_client(analytics_admin):
    """Return API client authenticated as ADMIN."""
    client = APIClient()
    refresh = RefreshToken.for_user(analytics_admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Tracked records
# =============================================================================

@pytest.fixture
def popular_place(db):
    return Place.objects.create(
        title='Dombay Glade',
        slug='dombay-glade',
        unique_views_count=120,
        rating=Decimal('4.2'),
        reviews_count=10,
    )


@pytest.fixture
def quiet_place(db):
    return Place.objects.create(
        title='Quiet Gorge',
        slug='quiet-gorge',
        unique_views_count=3,
        rating=Decimal('4.9'),
        reviews_count=2,
    )


@pytest.fixture
def inactive_place(db):
    return Place.objects.create(title='Closed Trail', slug='closed-trail', unique_views_count=999, is_active=False)


@pytest.fixture
def analytics_route(db):
    return Route.objects.create(title='Circle Route', slug='circle-route', unique_views_count=7)


@pytest.fixture
def analytics_service(db):
    return Service.objects.create(title='Horse Rides', slug='horse-rides', category='Прокат')


@pytest.fixture
def analytics_news(db):
    return News.objects.create(title='Season Opening', slug='season-opening')


@pytest.fixture
def analytics_reviews(popular_place):
    """One pending and one approved review."""
    return [
        Review.objects.create(
            entity_type='place', entity_id=popular_place.id, author_name='A',
            text='Nice', rating=4, status=status,
        )
        for status in (ReviewStatus.PENDING, ReviewStatus.APPROVED)
    ]
