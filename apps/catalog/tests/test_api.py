from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.analytics.models import ViewTracking
from apps.catalog.models import Place, Route, Service


@pytest.mark.django_db
class TestAdminPlaces:
    """Test /api/admin/places/."""

    def test_requires_admin(self, api_client, catalog_user_client):
        url = reverse('catalog:admin-place-list')

        assert api_client.get(url).status_code == status.HTTP_401_UNAUTHORIZED
        assert catalog_user_client.get(url).status_code == status.HTTP_403_FORBIDDEN

    def test_list_includes_inactive(self, catalog_admin_client, lake, hidden_place):
        response = catalog_admin_client.get(reverse('catalog:admin-place-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_list_search(self, catalog_admin_client, lake, waterfall):
        response = catalog_admin_client.get(reverse('catalog:admin-place-list'), {'search': 'alibek'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['slug'] == 'alibek-waterfall'

    def test_create(self, catalog_admin_client, lake, django_capture_on_commit_callbacks):
        data = {
            'title': 'Chuchkhur Waterfall',
            'seasons': ['лето'],
            'custom_filters': {'housing': ['Отель']},
            'nearby_place_ids': [str(lake.id)],
        }
        with django_capture_on_commit_callbacks(execute=True):
            response = catalog_admin_client.post(reverse('catalog:admin-place-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['slug'].startswith('chuchkhur-waterfall-')
        assert response.data['custom_filters'] == {'housing': ['Отель']}
        lake.refresh_from_db()
        assert lake.nearby_place_ids == [response.data['id']]

    def test_create_without_title(self, catalog_admin_client):
        response = catalog_admin_client.post(reverse('catalog:admin-place-list'), {'location': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_put_keeps_absent_keys(self, catalog_admin_client, lake):
        url = reverse('catalog:admin-place-detail', kwargs={'pk': lake.id})
        response = catalog_admin_client.put(url, {'location': 'Karachay'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['location'] == 'Karachay'
        assert response.data['title'] == 'Baduk Lakes'
        assert response.data['seasons'] == ['лето', 'осень']

    def test_retrieve_inactive(self, catalog_admin_client, hidden_place):
        url = reverse('catalog:admin-place-detail', kwargs={'pk': hidden_place.id})

        assert catalog_admin_client.get(url).status_code == status.HTTP_200_OK

    def test_delete(self, catalog_admin_client, lake):
        url = reverse('catalog:admin-place-detail', kwargs={'pk': lake.id})
        response = catalog_admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Place.objects.filter(pk=lake.pk).exists()
        assert catalog_admin_client.delete(url).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestAdminRoutesAndServices:

    def test_create_route_with_points_and_guides(
        self, catalog_admin_client, guide, lake, django_capture_on_commit_callbacks
    ):
        data = {
            'title': 'Lake Trail',
            'difficulty': 2,
            'place_ids': [str(lake.id)],
            'guide_ids': [str(guide.id)],
            'points': [{'title': 'Parking'}, {'title': 'Lake shore'}],
        }
        with django_capture_on_commit_callbacks(execute=True):
            response = catalog_admin_client.post(reverse('catalog:admin-route-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert [point['title'] for point in response.data['points']] == ['Parking', 'Lake shore']
        guide.refresh_from_db()
        assert guide.route_ids == [response.data['id']]

    def test_route_invalid_difficulty(self, catalog_admin_client):
        response = catalog_admin_client.post(
            reverse('catalog:admin-route-list'), {'title': 'X', 'difficulty': 9}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_route(self, catalog_admin_client, easy_route):
        url = reverse('catalog:admin-route-detail', kwargs={'pk': easy_route.id})
        response = catalog_admin_client.patch(url, {'is_active': False}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_active'] is False
        assert response.data['difficulty'] == 1

    def test_create_service(self, catalog_admin_client):
        data = {'title': 'Horse Rental', 'category': 'Прокат', 'data': {'horses': 12}}
        response = catalog_admin_client.post(reverse('catalog:admin-service-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data'] == {'horses': 12}
        assert response.data['route_ids'] == []

    def test_service_not_found(self, catalog_admin_client):
        url = reverse('catalog:admin-service-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})

        assert catalog_admin_client.get(url).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestPublicPlaces:
    """Test /api/places/."""

    def test_list_active_only(self, api_client, lake, hidden_place):
        response = api_client.get(reverse('catalog:place-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [item['slug'] for item in response.data['results']] == ['baduk-lakes']

    def test_filter_comma_and_repeated(self, api_client, lake, waterfall, glacier):
        url = reverse('catalog:place-list')

        response = api_client.get(url, {'seasons': 'осень,зима'})
        assert response.data['count'] == 2

        response = api_client.get(f'{url}?seasons=зима&seasons=осень')
        assert response.data['count'] == 2

        response = api_client.get(f'{url}?seasons[]=зима')
        assert response.data['results'][0]['slug'] == 'sofia-glacier'

    def test_extra_filter_needs_configured_group(self, api_client, catalog_admin_client, lake, waterfall):
        url = reverse('catalog:place-list')

        # Unknown keys are ignored
        assert api_client.get(url, {'housing': 'Кемпинг'}).data['count'] == 2

        catalog_admin_client.post(
            reverse('filters:add-group', kwargs={'family': 'places'}),
            {'label': 'Жильё', 'key': 'housing'},
            format='json',
        )
        assert api_client.get(url, {'housing': 'Кемпинг'}).data['count'] == 1

    def test_sort_by_popularity(self, api_client, lake, waterfall):
        response = api_client.get(reverse('catalog:place-list'), {'sort_by': 'popularity'})

        assert response.data['results'][0]['slug'] == 'alibek-waterfall'

    def test_page_size(self, api_client, lake, waterfall, glacier):
        response = api_client.get(reverse('catalog:place-list'), {'page_size': 2})

        assert response.data['count'] == 3
        assert len(response.data['results']) == 2
        assert response.data['next'] is not None

    def test_detail_by_slug_with_nearby(self, api_client, lake, waterfall, hidden_place):
        Place.objects.filter(pk=lake.pk).update(
            nearby_place_ids=[str(waterfall.id), str(hidden_place.id), 'gone']
        )

        response = api_client.get(reverse('catalog:place-detail', kwargs={'pk': 'baduk-lakes'}))

        assert response.status_code == status.HTTP_200_OK
        assert [item['slug'] for item in response.data['nearby_places']] == ['alibek-waterfall']

    def test_detail_counts_unique_views(self, api_client, glacier):
        url = reverse('catalog:place-detail', kwargs={'pk': str(glacier.id)})

        first = api_client.get(url)
        api_client.get(url)

        assert first.cookies['visitorId'].value
        glacier.refresh_from_db()
        assert glacier.unique_views_count == 1
        assert ViewTracking.objects.filter(entity_type='place', entity_id=glacier.id).count() == 1

    def test_authenticated_views_keyed_by_user(self, catalog_user_client, catalog_user, glacier):
        url = reverse('catalog:place-detail', kwargs={'pk': 'sofia-glacier'})
        catalog_user_client.get(url)

        tracking = ViewTracking.objects.get(entity_id=glacier.id)
        assert tracking.visitor_id == str(catalog_user.id)
        assert tracking.user == catalog_user

    def test_inactive_detail_404(self, api_client, hidden_place):
        response = api_client.get(reverse('catalog:place-detail', kwargs={'pk': 'closed-cave'}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not ViewTracking.objects.exists()


@pytest.mark.django_db
class TestPublicRoutesAndServices:

    def test_route_filters(self, api_client, easy_route, hard_route):
        url = reverse('catalog:route-list')

        assert api_client.get(url, {'difficulty_levels': '1,2'}).data['results'][0]['slug'] == 'easy-walk'
        assert api_client.get(url, {'transport': 'Верхом'}).data['count'] == 1
        assert api_client.get(url, {'distance_options': '100+ км'}).data['count'] == 0

    def test_route_detail_resolves_places_and_guides(self, api_client, easy_route, lake, guide, rental):
        Route.objects.filter(pk=easy_route.pk).update(
            place_ids=[str(lake.id)],
            guide_ids=[str(guide.id), str(rental.id)],
        )

        response = api_client.get(reverse('catalog:route-detail', kwargs={'pk': 'easy-walk'}))

        assert response.status_code == status.HTTP_200_OK
        assert [item['slug'] for item in response.data['places']] == ['baduk-lakes']
        assert [item['slug'] for item in response.data['guides']] == ['aslan-guide']

    def test_service_category_filter(self, api_client, guide, second_guide, rental):
        response = api_client.get(reverse('catalog:service-list'), {'category': 'Гид,Guide'})

        assert response.data['count'] == 2

    def test_guide_detail_lists_routes(self, api_client, guide, easy_route):
        Service.objects.filter(pk=guide.pk).update(route_ids=[str(easy_route.id)])

        response = api_client.get(reverse('catalog:service-detail', kwargs={'pk': 'aslan-guide'}))

        assert [item['slug'] for item in response.data['routes']] == ['easy-walk']
        guide.refresh_from_db()
        assert guide.unique_views_count == 1


@pytest.mark.django_db
class TestRepairReferencesCommand:

    def test_dry_run_then_apply(self, lake, waterfall):
        Place.objects.filter(pk=lake.pk).update(nearby_place_ids=[str(waterfall.id)])

        out = StringIO()
        call_command('repair_references', dry_run=True, stdout=out)
        assert 'No changes made' in out.getvalue()
        assert Place.objects.get(pk=waterfall.pk).nearby_place_ids == []

        out = StringIO()
        call_command('repair_references', stdout=out)
        assert 'Nearby places: 1 fixed' in out.getvalue()
        assert Place.objects.get(pk=waterfall.pk).nearby_place_ids == [str(lake.id)]
