from django.contrib import admin
from django.urls import include, path

from accounts import urls as account_urls
from donations import urls as donation_urls
from . import views

urlpatterns = [
    # Django admin site (the REST admin API lives under /admin/)
    path('django-admin/', admin.site.urls),

    # ========================================
    # ACCOUNTS
    # ========================================
    path('auth/', include(account_urls.auth_patterns)),
    path('user/', include(account_urls.user_patterns)),
    path('admin/', include(account_urls.admin_patterns)),

    # ========================================
    # DIRECTORIES
    # ========================================
    path('hospital/', include('hospitals.urls')),
    path('wilaya/', include('wilayas.urls')),

    # ========================================
    # DONATIONS
    # ========================================
    path('donation/', include(donation_urls.donation_patterns)),
    path('donation-request/', include(donation_urls.request_patterns)),
    path('notification/', include('notifications.urls')),

    # ========================================
    # READ-ONLY AGGREGATES
    # ========================================
    path('stats/', include('stats.urls')),
    path('map/', include('maps.urls')),
    path('health/', views.health, name='health'),
]
