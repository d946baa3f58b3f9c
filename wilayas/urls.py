from django.urls import path

from . import views

urlpatterns = [
    path('', views.wilaya_list, name='wilaya_list'),
    path('nearby/', views.nearby_wilayas, name='wilaya_nearby'),
    path('blood-centers/', views.all_blood_centers, name='blood_centers'),
    path('<str:code>/', views.wilaya_detail, name='wilaya_detail'),
    path('<str:code>/blood-centers/', views.wilaya_blood_centers, name='wilaya_blood_centers'),
]
