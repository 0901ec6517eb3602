from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.catalog.models import Place, Route
from apps.filters.models import FilterConfig


@pytest.mark.django_db
class TestAdminFilterConfig:
    """Test /api/filters/admin/<family>/."""

    def test_get_creates_defaults(self, filters_admin_client):
        url = reverse('filters:admin-config', kwargs={'family': 'routes'})
        response = filters_admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['family'] == 'routes'
        assert response.data['fixed_groups']['transport'][0] == 'Пешком'
        assert FilterConfig.objects.filter(family='routes').exists()

    def test_unknown_family(self, filters_admin_client):
        url = reverse('filters:admin-config', kwargs={'family': 'hotels'})
        response = filters_admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_requires_admin(self, api_client, filters_user_client):
        url = reverse('filters:admin-config', kwargs={'family': 'places'})

        assert api_client.get(url).status_code == status.HTTP_401_UNAUTHORIZED
        assert filters_user_client.get(url).status_code == status.HTTP_403_FORBIDDEN

    def test_put_replaces_values(self, filters_admin_client):
        url = reverse('filters:admin-config', kwargs={'family': 'places'})
        data = {
            'fixed_groups': {'seasons': ['зима']},
            'extra_groups': [{'key': 'wifi', 'label': 'Wi-Fi', 'values': ['Есть']}],
            'hidden_fixed_groups': ['accessibility'],
        }
        response = filters_admin_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fixed_groups']['seasons'] == ['зима']
        assert response.data['extra_groups'][0]['key'] == 'wifi'
        assert response.data['hidden_fixed_groups'] == ['accessibility']

    def test_put_collision_is_rejected(self, filters_admin_client):
        url = reverse('filters:admin-config', kwargs={'family': 'places'})
        data = {'extra_groups': [{'key': 'directions', 'label': 'Directions'}]}
        response = filters_admin_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestGroupEndpoints:

    def test_add_group(self, filters_admin_client):
        url = reverse('filters:add-group', kwargs={'family': 'places'})
        response = filters_admin_client.post(url, {'label': 'Тип жилья'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['extra_groups'][0]['key'] == 'tip_zhilya'

    def test_add_group_conflict(self, filters_admin_client):
        url = reverse('filters:add-group', kwargs={'family': 'places'})
        response = filters_admin_client.post(url, {'label': 'Seasons', 'key': 'seasons'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_remove_extra_group_reports_cascade(self, filters_admin_client, arkhyz_place):
        filters_admin_client.post(
            reverse('filters:add-group', kwargs={'family': 'places'}),
            {'label': 'Жильё', 'key': 'housing'},
            format='json',
        )

        url = reverse('filters:remove-group', kwargs={'family': 'places'})
        response = filters_admin_client.post(url, {'key': 'housing'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cascade'] == {'visited': 1, 'updated': 1, 'failed': 0}
        assert response.data['config']['extra_groups'] == []

    def test_remove_missing_group(self, filters_admin_client):
        url = reverse('filters:remove-group', kwargs={'family': 'places'})
        response = filters_admin_client.post(url, {'key': 'nope'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_group_meta(self, filters_admin_client):
        url = reverse('filters:group-meta', kwargs={'family': 'places'})
        response = filters_admin_client.patch(
            url, {'key': 'seasons', 'label': 'Сезон', 'icon_type': 'library'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fixed_group_meta']['seasons']['label'] == 'Сезон'
        assert response.data['fixed_group_meta']['seasons']['icon_type'] == 'library'


@pytest.mark.django_db
class TestValueEndpoints:

    def test_replace_value_cascades(self, filters_admin_client, horse_route):
        url = reverse('filters:replace-value', kwargs={'family': 'routes'})
        data = {'group': 'seasons', 'old_value': 'Лето', 'new_value': 'Летний сезон'}
        response = filters_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cascade']['updated'] == 1
        assert 'Летний сезон' in response.data['config']['fixed_groups']['seasons']
        horse_route.refresh_from_db()
        assert horse_route.season == 'Летний сезон'

    def test_replace_missing_value(self, filters_admin_client):
        url = reverse('filters:replace-value', kwargs={'family': 'routes'})
        data = {'group': 'seasons', 'old_value': 'Межсезонье', 'new_value': 'x'}
        response = filters_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_replace_with_blank_value(self, filters_admin_client):
        url = reverse('filters:replace-value', kwargs={'family': 'routes'})
        data = {'group': 'seasons', 'old_value': 'Лето', 'new_value': ''}
        response = filters_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_remove_value_cascades(self, filters_admin_client, arkhyz_place):
        url = reverse('filters:remove-value', kwargs={'family': 'places'})
        response = filters_admin_client.post(url, {'group': 'directions', 'value': 'Архыз'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'Архыз' not in response.data['config']['fixed_groups']['directions']
        arkhyz_place.refresh_from_db()
        assert arkhyz_place.directions == ['Домбай']


@pytest.mark.django_db
class TestPublicFilters:

    def test_public_without_config(self, api_client):
        url = reverse('filters:public-config', kwargs={'family': 'routes'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fixed_groups']['seasons'] == []
        assert not FilterConfig.objects.exists()

    def test_public_with_config(self, api_client, filters_admin_client):
        filters_admin_client.get(reverse('filters:admin-config', kwargs={'family': 'places'}))

        response = api_client.get(reverse('filters:public-config', kwargs={'family': 'places'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fixed_groups']['seasons'] == ['зима', 'весна', 'лето', 'осень']

    def test_public_unknown_family(self, api_client):
        response = api_client.get(reverse('filters:public-config', kwargs={'family': 'hotels'}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestRefilterCommand:

    def test_dry_run_counts_without_writing(self, arkhyz_place, dombay_place):
        out = StringIO()
        call_command(
            'refilter', family='places', group='directions', old_value='Домбай',
            dry_run=True, stdout=out,
        )

        out = out.getvalue()
        assert '2 record(s)' in out
        assert Place.objects.get(pk=dombay_place.pk).directions == ['Домбай']

    def test_redrive_rename(self, horse_route):
        out = StringIO()
        call_command(
            'refilter', family='routes', group='transport', old_value='Верхом',
            new_value='Конный', stdout=out,
        )

        out = out.getvalue()
        assert 'updated 1' in out
        assert Route.objects.get(pk=horse_route.pk).transport == 'Конный'
