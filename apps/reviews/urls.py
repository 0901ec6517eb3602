from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'reviews'

router = DefaultRouter()
router.register(r'admin/reviews', views.AdminReviewViewSet, basename='admin-review')

urlpatterns = [
    # Public
    # GET    /api/reviews/?entity_type=&entity_id=  - Approved reviews of a record
    # POST   /api/reviews/                          - Submit review (pending)
    path('reviews/', views.reviews, name='review-list'),

    # Moderation (ADMIN/SUPERADMIN)
    # GET    /api/admin/reviews/              - List reviews (?status=&entity_type=)
    # GET    /api/admin/reviews/statistics/   - Review statistics
    # GET    /api/admin/reviews/{id}/         - Get review
    # PUT    /api/admin/reviews/{id}/         - Change status/text
    # PATCH  /api/admin/reviews/{id}/         - Same as PUT
    # DELETE /api/admin/reviews/{id}/         - Delete review
    path('', include(router.urls)),
]
