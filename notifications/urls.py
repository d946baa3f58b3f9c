from django.urls import path

from . import views

urlpatterns = [
    path('', views.notification_list, name='notification_list'),
    path('read/', views.mark_as_read, name='notification_read'),
    path('archive/', views.archive, name='notification_archive'),
    path('unread-count/', views.unread_count, name='notification_unread_count'),
]
