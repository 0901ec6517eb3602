from django.urls import path
from . import views

app_name = 'filters'

urlpatterns = [
    # Admin: /api/filters/admin/<family>/...
    path('admin/<str:family>/', views.filter_config, name='admin-config'),
    path('admin/<str:family>/add-group/', views.add_group, name='add-group'),
    path('admin/<str:family>/remove-group/', views.remove_group, name='remove-group'),
    path('admin/<str:family>/group-meta/', views.group_meta, name='group-meta'),
    path('admin/<str:family>/replace-value/', views.replace_value, name='replace-value'),
    path('admin/<str:family>/remove-value/', views.remove_value, name='remove-value'),

    # Public: /api/filters/<family>/
    path('<str:family>/', views.public_filters, name='public-config'),
]
