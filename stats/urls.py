from django.urls import path

from . import views

urlpatterns = [
    path('users/', views.users, name='stats_users'),
    path('donations/', views.donations, name='stats_donations'),
    path('dashboard/', views.dashboard, name='stats_dashboard'),
    path('blood-supply/', views.blood_supply_view, name='stats_blood_supply'),
    path('blood-types/', views.blood_types, name='stats_blood_types'),
]

# Available endpoints:
# GET  /stats/users/         - user and donor counts (auth)
# GET  /stats/donations/     - donation and request counts by status (auth)
# GET  /stats/dashboard/     - both of the above plus hospitals and blood supply (auth)
# GET  /stats/blood-supply/  - supply level per blood type
# GET  /stats/blood-types/   - donor and user counts per blood type
