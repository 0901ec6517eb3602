from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'content'

router = DefaultRouter()
router.register(r'admin/news', views.AdminNewsViewSet, basename='admin-news')
router.register(r'admin/media', views.MediaViewSet, basename='media')
router.register(r'news', views.PublicNewsViewSet, basename='news')

urlpatterns = [
    # Public site content
    # GET    /api/home/                    - Home page blocks
    # GET    /api/region/                  - Region page blocks
    # GET    /api/footer/                  - Footer
    # GET    /api/pages/{name}/            - routes|places|news|services page header
    # POST   /api/feedback/                - Footer feedback form
    path('home/', views.home_content, name='home'),
    path('region/', views.region_content, name='region'),
    path('footer/', views.footer_content, name='footer'),
    path('pages/<str:page_name>/', views.page_content, name='page'),
    path('feedback/', views.feedback, name='feedback'),

    # Admin site content (ADMIN/SUPERADMIN), GET or PUT {"content": {...}}
    path('admin/home/', views.admin_home_content, name='admin-home'),
    path('admin/region/', views.admin_region_content, name='admin-region'),
    path('admin/footer/', views.admin_footer_content, name='admin-footer'),
    path('admin/pages/<str:page_name>/', views.admin_page_content, name='admin-page'),

    # Router
    # GET    /api/news/                         - Active news (?type=article&category=&search=)
    # GET    /api/news/{id-or-slug}/            - News item, records a view
    # GET|POST /api/admin/news/                 - Admin news list / create
    # GET|PUT|PATCH|DELETE /api/admin/news/{id}/
    # GET    /api/admin/media/                  - Media library
    # POST   /api/admin/media/upload/           - Image upload (WebP)
    # POST   /api/admin/media/upload-document/  - PDF/DOC/DOCX upload
    # POST   /api/admin/media/upload-video/     - Video upload
    # DELETE /api/admin/media/{id}/             - Delete file and record
    path('', include(router.urls)),
]
