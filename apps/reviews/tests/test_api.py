import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.reviews.models import Review, ReviewStatus


@pytest.mark.django_db
class TestPublicReviews:
    """Test /api/reviews/."""

    def test_submit_anonymous(self, api_client, review_place):
        data = {
            'entity_type': 'place',
            'entity': 'big-azau-lake',
            'author_name': 'Guest',
            'text': 'Beautiful in October.',
            'rating': 5,
        }
        response = api_client.post(reverse('reviews:review-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['entity_id'] == str(review_place.id)
        review = Review.objects.get(id=response.data['id'])
        assert review.status == ReviewStatus.PENDING
        assert review.user is None

    def test_submit_authenticated_links_user(self, review_auth_client, review_user, review_service):
        data = {
            'entity_type': 'service',
            'entity': str(review_service.id),
            'author_name': 'Amina',
            'text': 'Knows every trail.',
            'rating': 4,
        }
        response = review_auth_client.post(reverse('reviews:review-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Review.objects.get(id=response.data['id']).user == review_user

    def test_submit_rating_out_of_range(self, api_client, review_place):
        data = {'entity_type': 'place', 'entity': 'big-azau-lake', 'author_name': 'A', 'text': 'B', 'rating': 6}
        response = api_client.post(reverse('reviews:review-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_unknown_target(self, api_client, db):
        data = {'entity_type': 'route', 'entity': 'no-such-route', 'author_name': 'A', 'text': 'B', 'rating': 3}
        response = api_client.post(reverse('reviews:review-list'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_list_shows_only_approved(
        self, api_client, review_place, pending_review, approved_reviews, rejected_review
    ):
        response = api_client.get(
            reverse('reviews:review-list'),
            {'entity_type': 'place', 'entity_id': str(review_place.id)},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert {item['author_name'] for item in response.data['results']} == {'First', 'Second'}
        assert 'status' not in response.data['results'][0]

    def test_list_requires_target(self, api_client, db):
        response = api_client.get(reverse('reviews:review-list'), {'entity_type': 'place'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestModerationApi:
    """Test /api/admin/reviews/."""

    def test_requires_admin(self, review_auth_client, pending_review):
        response = review_auth_client.get(reverse('reviews:admin-review-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_filter_by_status(self, moderator_client, pending_review, approved_reviews):
        response = moderator_client.get(reverse('reviews:admin-review-list'), {'status': 'pending'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['status'] == 'pending'
        assert response.data['results'][0]['entity_title'] == 'Big Azau Lake'

    def test_approve(self, moderator_client, review_place, pending_review):
        url = reverse('reviews:admin-review-detail', kwargs={'pk': pending_review.id})
        response = moderator_client.put(url, {'status': 'approved'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'approved'
        review_place.refresh_from_db()
        assert review_place.rating == Decimal('4.0')
        assert review_place.reviews_count == 1

    def test_patch_text(self, moderator_client, pending_review):
        url = reverse('reviews:admin-review-detail', kwargs={'pk': pending_review.id})
        response = moderator_client.patch(url, {'text': 'Edited by moderator.'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['text'] == 'Edited by moderator.'

    def test_invalid_status(self, moderator_client, pending_review):
        url = reverse('reviews:admin-review-detail', kwargs={'pk': pending_review.id})
        response = moderator_client.put(url, {'status': 'hidden'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_not_allowed(self, moderator_client):
        response = moderator_client.post(reverse('reviews:admin-review-list'), {}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_delete(self, moderator_client, review_place, approved_reviews):
        url = reverse('reviews:admin-review-detail', kwargs={'pk': approved_reviews[0].id})
        response = moderator_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        review_place.refresh_from_db()
        assert review_place.reviews_count == 1
        assert moderator_client.delete(url).status_code == status.HTTP_404_NOT_FOUND

    def test_statistics(self, moderator_client, pending_review, approved_reviews):
        response = moderator_client.get(reverse('reviews:admin-review-statistics'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_reviews'] == 3
        assert response.data['by_status']['pending'] == 1
        assert response.data['avg_rating'] == 4.5
