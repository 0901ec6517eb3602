from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('auth/register/', views.register, name='register'),
    path('auth/login/', views.login, name='login'),

    # Profile
    path('auth/me/', views.me, name='me'),
    path('auth/me/avatar/', views.upload_avatar, name='avatar'),
    path('auth/me/favorites/', views.favorites, name='favorites'),
    path('auth/me/favorites/<str:entity_type>/<uuid:entity_id>/', views.favorite_detail, name='favorite-detail'),

    # Administration
    path('admin/users/', views.admin_user_list, name='admin-user-list'),
    path('admin/users/<uuid:user_id>/role/', views.admin_user_role, name='admin-user-role'),
    path('admin/users/<uuid:user_id>/ban/', views.admin_user_ban, name='admin-user-ban'),
    path('admin/users/<uuid:user_id>/unban/', views.admin_user_unban, name='admin-user-unban'),
]
