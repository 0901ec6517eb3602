from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Admin dashboard
    path('stats/', views.dashboard_stats, name='dashboard-stats'),
    path('stats/top/', views.top_entities, name='top-entities'),
    path('stats/views/', views.views_timeseries, name='views-timeseries'),
]
