from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'admin/places', views.AdminPlaceViewSet, basename='admin-place')
router.register(r'admin/routes', views.AdminRouteViewSet, basename='admin-route')
router.register(r'admin/services', views.AdminServiceViewSet, basename='admin-service')
router.register(r'places', views.PublicPlaceViewSet, basename='place')
router.register(r'routes', views.PublicRouteViewSet, basename='route')
router.register(r'services', views.PublicServiceViewSet, basename='service')

urlpatterns = [
    # Admin ViewSet routes (ADMIN/SUPERADMIN)
    # GET    /api/admin/places/          - List places (?search=)
    # POST   /api/admin/places/          - Create place
    # GET    /api/admin/places/{id}/     - Get place
    # PUT    /api/admin/places/{id}/     - Update place (absent keys kept)
    # PATCH  /api/admin/places/{id}/     - Same as PUT
    # DELETE /api/admin/places/{id}/     - Delete place, detach nearby mirrors
    # Same shape for /api/admin/routes/ and /api/admin/services/

    # Public routes
    # GET    /api/places/                - Active places with filters
    # GET    /api/places/{id-or-slug}/   - Place page with nearby places
    # GET    /api/routes/                - Active routes with filters
    # GET    /api/routes/{id-or-slug}/   - Route page with places and guides
    # GET    /api/services/              - Active services (?category=)
    # GET    /api/services/{id-or-slug}/ - Service page, guides with routes

    path('', include(router.urls)),
]
