import io
from datetime import timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from PIL import Image
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.content.models import News, NewsType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def editor(db):
    """Create and return a content administrator."""
    return User.objects.create_user(
        login='content-editor',
        email='content-editor@example.com',
        password='AdminPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def reader(db):
    """Create and return a regular user."""
    return User.objects.create_user(
        login='reader',
        email='reader@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def editor_client(editor):
    """Return API client authenticated as ADMIN."""
    client = APIClient()
    refresh = RefreshToken.for_user(editor)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def reader_client(reader):
    """Return API client authenticated as a regular user."""
    client = APIClient()
    refresh = RefreshToken.for_user(reader)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def festival_news(db):
    return News.objects.create(
        title='Arkhyz Music Festival',
        slug='arkhyz-music-festival',
        type=NewsType.NEWS,
        category='События',
        short_description='Open air concert near the observatory',
        published_at=timezone.now() - timedelta(days=1),
    )


@pytest.fixture
def road_news(db):
    return News.objects.create(
        title='Road to Dombay reopened',
        slug='road-to-dombay-reopened',
        type=NewsType.NEWS,
        category='Дороги',
        published_at=timezone.now(),
    )


@pytest.fixture
def guide_article(db):
    return News.objects.create(
        title='First Trip Checklist',
        slug='first-trip-checklist',
        type=NewsType.ARTICLE,
        images=['/uploads/checklist.webp'],
        published_at=timezone.now(),
    )


@pytest.fixture
def draft_news(db):
    return News.objects.create(title='Draft', slug='draft', is_active=False)


@pytest.fixture
def media_root(settings, tmp_path):
    """Store uploads in a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


def _image_bytes(fmt, mode='RGB'):
    buffer = io.BytesIO()
    color = (10, 120, 200, 128) if mode == 'RGBA' else (10, 120, 200)
    Image.new(mode, (16, 12), color).save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_upload():
    return SimpleUploadedFile('photo.jpg', _image_bytes('JPEG'), content_type='image/jpeg')


@pytest.fixture
def png_alpha_upload():
    return SimpleUploadedFile('icon.png', _image_bytes('PNG', 'RGBA'), content_type='image/png')


@pytest.fixture
def svg_upload():
    content = b'<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"></svg>'
    return SimpleUploadedFile('logo.svg', content, content_type='image/svg+xml')


@pytest.fixture
def pdf_upload():
    return SimpleUploadedFile('rules.pdf', b'%PDF-1.4\n%%EOF\n', content_type='application/pdf')


@pytest.fixture
def video_upload():
    return SimpleUploadedFile('tour.MOV', b'\x00\x00\x00\x14ftypqt  ', content_type='video/quicktime')
