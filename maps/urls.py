from django.urls import path

from . import views

urlpatterns = [
    path('hospitals/', views.hospitals, name='map_hospitals'),
    path('donors/', views.donors, name='map_donors'),
    path('status/', views.status, name='map_status'),
]
