import pytest
from io import StringIO
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.analytics.analytics import AnalyticsQueries
from apps.analytics.exceptions import InvalidMetricError
from apps.analytics.models import ViewTracking


# =============================================================================
# Visitor Cookie Middleware Tests
# =============================================================================

@pytest.mark.django_db
class TestVisitorCookie:
    """Tests for the visitorId cookie set by VisitorIdMiddleware."""

    def test_anonymous_gets_cookie(self, api_client):
        response = api_client.get(reverse('catalog:place-list'))

        cookie = response.cookies['visitorId']
        assert len(cookie.value) == 36
        assert cookie['max-age'] == 365 * 24 * 60 * 60

    def test_existing_cookie_is_kept(self, api_client, quiet_place):
        api_client.cookies['visitorId'] = 'returning-visitor'

        response = api_client.get(reverse('catalog:place-detail', kwargs={'pk': 'quiet-gorge'}))

        assert 'visitorId' not in response.cookies
        assert ViewTracking.objects.get().visitor_id == 'returning-visitor'

    def test_authenticated_user_gets_no_cookie(self, analytics_user_client, analytics_user, quiet_place):
        response = analytics_user_client.get(reverse('catalog:place-detail', kwargs={'pk': 'quiet-gorge'}))

        assert 'visitorId' not in response.cookies
        assert ViewTracking.objects.get().visitor_id == str(analytics_user.id)


# =============================================================================
# Dashboard Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestDashboardStats:
    """Tests for GET /api/admin/stats/"""

    def test_counts(
        self, analytics_admin_client, popular_place, inactive_place, analytics_route,
        analytics_service, analytics_news, analytics_reviews,
    ):
        response = analytics_admin_client.get(reverse('analytics:dashboard-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'routes': 1,
            'places': 2,
            'news': 1,
            'services': 1,
            'reviews': 2,
            'pending_reviews': 1,
        }

    def test_requires_admin(self, analytics_user_client, api_client):
        url = reverse('analytics:dashboard-stats')

        assert analytics_user_client.get(url).status_code == status.HTTP_403_FORBIDDEN
        assert api_client.get(url).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestTopEntities:
    """Tests for GET /api/admin/stats/top/"""

    def test_top_viewed_places(self, analytics_admin_client, popular_place, quiet_place, inactive_place):
        response = analytics_admin_client.get(reverse('analytics:top-entities'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['entity_type'] == 'place'
        assert [item['slug'] for item in response.data['results']] == ['dombay-glade', 'quiet-gorge']
        assert 'rating' in response.data['results'][0]

    def test_top_rated(self, analytics_admin_client, popular_place, quiet_place):
        response = analytics_admin_client.get(
            reverse('analytics:top-entities'), {'metric': 'rating', 'limit': 1}
        )

        assert [item['slug'] for item in response.data['results']] == ['quiet-gorge']

    def test_rating_not_available_for_routes(self, analytics_admin_client, analytics_route):
        response = analytics_admin_client.get(
            reverse('analytics:top-entities'), {'entity_type': 'route', 'metric': 'rating'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_news_by_views(self, analytics_admin_client, analytics_news):
        response = analytics_admin_client.get(reverse('analytics:top-entities'), {'entity_type': 'news'})

        assert response.data['results'][0]['slug'] == 'season-opening'
        assert 'rating' not in response.data['results'][0]

    def test_invalid_params(self, analytics_admin_client):
        url = reverse('analytics:top-entities')

        assert analytics_admin_client.get(url, {'entity_type': 'review'}).status_code == 400
        assert analytics_admin_client.get(url, {'limit': 0}).status_code == 400

    def test_invalid_metric_in_query_class(self, db):
        with pytest.raises(InvalidMetricError):
            AnalyticsQueries.top_entities('place', metric='likes')


@pytest.mark.django_db
class TestViewsTimeseries:
    """Tests for GET /api/admin/stats/views/"""

    def test_counts_per_day(self, analytics_admin_client, popular_place, analytics_route):
        ViewTracking.objects.create(entity_type='place', entity_id=popular_place.id, visitor_id='a')
        ViewTracking.objects.create(entity_type='place', entity_id=popular_place.id, visitor_id='b')
        ViewTracking.objects.create(entity_type='route', entity_id=analytics_route.id, visitor_id='a')

        response = analytics_admin_client.get(reverse('analytics:views-timeseries'), {'days': 7})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['days'] == 7
        assert len(response.data['data']) == 1
        assert response.data['data'][0]['views'] == 3

        response = analytics_admin_client.get(reverse('analytics:views-timeseries'), {'entity_type': 'route'})
        assert response.data['data'][0]['views'] == 1

    def test_empty(self, analytics_admin_client):
        response = analytics_admin_client.get(reverse('analytics:views-timeseries'))

        assert response.data['data'] == []
        assert response.data['entity_type'] is None


@pytest.mark.django_db
class TestSyncViewCountsCommand:

    def test_sync(self, quiet_place):
        out = StringIO()
        call_command('sync_view_counts', stdout=out)

        assert '1 counter(s) out of sync' in out.getvalue()
        quiet_place.refresh_from_db()
        assert quiet_place.unique_views_count == 0
