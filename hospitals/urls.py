from django.urls import path

from . import views

urlpatterns = [
    path('', views.hospital_list, name='hospital_list'),
    path('export/', views.export_hospitals, name='hospital_export'),
    path('nearby/', views.nearby_hospitals, name='hospital_nearby'),
    path('wilaya/<str:wilaya>/', views.hospitals_by_wilaya, name='hospitals_by_wilaya'),
    path('<int:hospital_id>/', views.hospital_detail, name='hospital_detail'),
]
