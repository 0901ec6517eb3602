import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Place, Route, Service
from apps.reviews.models import Review, ReviewStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def review_user(db):
    """Create and return a signed-in reviewer."""
    return User.objects.create_user(
        login='reviewer',
        email='reviewer@example.com',
        password='TestPass123!',
        name='Amina',
    )


@pytest.fixture
def moderator(db):
    """Create and return a content administrator."""
    return User.objects.create_user(
        login='moderator',
        email='moderator@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def review_auth_client(review_user):
    """Return API client authenticated as the reviewer."""
    client = APIClient()
    refresh = RefreshToken.for_user(review_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def moderator_client(moderator):
    """Return API client authenticated as ADMIN."""
    client = APIClient()
    refresh = RefreshToken.for_user(moderator)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def review_place(db):
    return Place.objects.create(title='Big Azau Lake', slug='big-azau-lake')


@pytest.fixture
def review_route(db):
    return Route.objects.create(title='Ridge Walk', slug='ridge-walk')


@pytest.fixture
def review_service(db):
    return Service.objects.create(title='Mountain Guide', slug='mountain-guide', category='Гид')


@pytest.fixture
def inactive_place(db):
    return Place.objects.create(title='Closed Gorge', slug='closed-gorge', is_active=False)


def _review(entity, entity_type, rating, status, author='Visitor'):
    return Review.objects.create(
        entity_type=entity_type,
        entity_id=entity.id,
        entity_title=entity.title,
        author_name=author,
        text='Worth the climb.',
        rating=rating,
        status=status,
    )


@pytest.fixture
def pending_review(review_place):
    return _review(review_place, 'place', 4, ReviewStatus.PENDING, author='Pending Author')


@pytest.fixture
def approved_reviews(review_place):
    """Two approved reviews (5 and 4) of the place."""
    return [
        _review(review_place, 'place', 5, ReviewStatus.APPROVED, author='First'),
        _review(review_place, 'place', 4, ReviewStatus.APPROVED, author='Second'),
    ]


@pytest.fixture
def rejected_review(review_place):
    return _review(review_place, 'place', 1, ReviewStatus.REJECTED, author='Rejected Author')
