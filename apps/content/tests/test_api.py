import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status

from apps.analytics.models import ViewTracking
from apps.content.models import Media, News


@pytest.mark.django_db
class TestSiteContentApi:

    def test_public_home_returns_bare_content(self, api_client):
        response = api_client.get(reverse('content:home'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['routesTitle'] == 'Маршруты'
        assert 'key' not in response.data

    def test_admin_put_then_public_get(self, editor_client, api_client):
        url = reverse('content:admin-region')
        response = editor_client.put(url, {'content': {'hero': {'title': 'KCR'}}}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['key'] == 'region'
        assert response.data['content']['hero']['title'] == 'KCR'

        public = api_client.get(reverse('content:region'))
        assert public.data['hero']['title'] == 'KCR'
        assert public.data['hero']['image'] == '/full_roates_bg.jpg'

    def test_admin_put_requires_object(self, editor_client):
        response = editor_client.put(reverse('content:admin-home'), {'content': [1, 2]}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_requires_role(self, reader_client, api_client):
        url = reverse('content:admin-home')

        assert reader_client.get(url).status_code == status.HTTP_403_FORBIDDEN
        assert api_client.put(url, {'content': {}}, format='json').status_code == status.HTTP_401_UNAUTHORIZED

    def test_footer(self, editor_client, api_client):
        assert api_client.get(reverse('content:footer')).data['bottom']['orgName'] == ''

        editor_client.put(
            reverse('content:admin-footer'),
            {'content': {'bottom': {'orgName': 'Tourism Committee'}}},
            format='json',
        )

        response = api_client.get(reverse('content:footer'))
        assert response.data == {'bottom': {'orgName': 'Tourism Committee'}}

    def test_pages(self, editor_client, api_client):
        response = api_client.get(reverse('content:page', kwargs={'page_name': 'routes'}))
        assert response.data['hero']['title'] == 'МАРШРУТЫ'

        url = reverse('content:admin-page', kwargs={'page_name': 'services'})
        response = editor_client.put(url, {'content': {'hero': {'title': 'УСЛУГИ'}}}, format='json')
        assert response.data['key'] == 'page:services'
        assert response.data['content']['hero']['title'] == 'УСЛУГИ'

    def test_unknown_page_404(self, api_client, editor_client):
        assert api_client.get(
            reverse('content:page', kwargs={'page_name': 'contacts'})
        ).status_code == status.HTTP_404_NOT_FOUND
        assert editor_client.put(
            reverse('content:admin-page', kwargs={'page_name': 'contacts'}), {'content': {}}, format='json'
        ).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestNewsApi:

    def test_admin_create(self, editor_client):
        data = {'title': 'Ski season opens', 'type': 'news', 'images': ['/uploads/a.webp']}
        response = editor_client.post(reverse('content:admin-news-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['slug'].startswith('ski-season-opens-')
        assert response.data['cover'] == '/uploads/a.webp'

    def test_admin_create_without_title(self, editor_client):
        response = editor_client.post(reverse('content:admin-news-list'), {'category': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_admin_list_includes_drafts(self, editor_client, festival_news, draft_news):
        response = editor_client.get(reverse('content:admin-news-list'))

        assert response.data['count'] == 2

    def test_admin_put_is_partial(self, editor_client, festival_news):
        url = reverse('content:admin-news-detail', kwargs={'pk': festival_news.id})
        response = editor_client.put(url, {'is_active': False}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Arkhyz Music Festival'
        assert response.data['is_active'] is False

    def test_admin_delete(self, editor_client, festival_news):
        url = reverse('content:admin-news-detail', kwargs={'pk': festival_news.id})

        assert editor_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert editor_client.delete(url).status_code == status.HTTP_404_NOT_FOUND
        assert not News.objects.exists()

    def test_public_list_type(self, api_client, festival_news, road_news, guide_article, draft_news):
        url = reverse('content:news-list')

        response = api_client.get(url)
        assert [item['slug'] for item in response.data['results']] == [
            'road-to-dombay-reopened', 'arkhyz-music-festival',
        ]

        response = api_client.get(url, {'type': 'article'})
        assert response.data['count'] == 1
        assert response.data['results'][0]['image'] == '/uploads/checklist.webp'

    def test_public_detail_records_view(self, api_client, festival_news):
        url = reverse('content:news-detail', kwargs={'pk': 'arkhyz-music-festival'})

        response = api_client.get(url)
        api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        festival_news.refresh_from_db()
        assert festival_news.unique_views_count == 1
        assert ViewTracking.objects.filter(entity_type='news').count() == 1

    def test_public_draft_404(self, api_client, draft_news):
        response = api_client.get(reverse('content:news-detail', kwargs={'pk': str(draft_news.id)}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestMediaApi:

    def test_upload_image(self, editor_client, media_root, jpeg_upload):
        response = editor_client.post(reverse('content:media-upload'), {'file': jpeg_upload}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['mimetype'] == 'image/webp'
        assert response.data['url'].startswith('/uploads/')
        assert response.data['url'].endswith('.webp')

    def test_upload_wrong_type(self, editor_client, media_root, pdf_upload):
        response = editor_client.post(reverse('content:media-upload'), {'file': pdf_upload}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Unsupported image type' in response.data['error']

    def test_upload_without_file(self, editor_client, media_root):
        response = editor_client.post(reverse('content:media-upload'), {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_upload_document_and_video(self, editor_client, media_root, pdf_upload, video_upload):
        document = editor_client.post(
            reverse('content:media-upload-document'), {'file': pdf_upload}, format='multipart'
        )
        video = editor_client.post(
            reverse('content:media-upload-video'), {'file': video_upload}, format='multipart'
        )

        assert document.status_code == status.HTTP_201_CREATED
        assert document.data['filename'].endswith('.pdf')
        assert video.status_code == status.HTTP_201_CREATED
        assert video.data['filename'].endswith('.mov')

    def test_list_and_delete(self, editor_client, media_root, svg_upload):
        created = editor_client.post(reverse('content:media-upload'), {'file': svg_upload}, format='multipart')

        listing = editor_client.get(reverse('content:media-list'))
        assert listing.data['count'] == 1

        url = reverse('content:media-detail', kwargs={'pk': created.data['id']})
        assert editor_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert not Media.objects.exists()
        assert editor_client.delete(url).status_code == status.HTTP_404_NOT_FOUND

    def test_requires_admin(self, reader_client, media_root, jpeg_upload):
        response = reader_client.post(reverse('content:media-upload'), {'file': jpeg_upload}, format='multipart')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestFeedbackApi:

    def test_send(self, api_client, editor_client):
        editor_client.put(
            reverse('content:admin-footer'),
            {'content': {'right': {'formRecipientEmail': 'tourism@example.com'}}},
            format='json',
        )

        data = {'name': 'Olga', 'email': 'olga@example.com', 'text': 'Is the road open?'}
        response = api_client.post(reverse('content:feedback'), data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert mail.outbox[0].to == ['tourism@example.com']

    def test_invalid_email(self, api_client, db):
        data = {'name': 'Olga', 'email': 'not-an-email', 'text': 'Hi'}
        response = api_client.post(reverse('content:feedback'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_not_configured(self, api_client, db):
        data = {'name': 'Olga', 'email': 'olga@example.com', 'text': 'Hi'}
        response = api_client.post(reverse('content:feedback'), data, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert mail.outbox == []
