from django.urls import path

from . import views

# ========================================
# DONATIONS  (/donation/)
# ========================================
donation_patterns = [
    path('', views.create_donation, name='donation_create'),
    path('user/', views.user_donations, name='donation_user'),
    path('<int:donation_id>/', views.donation_detail, name='donation_detail'),
    path('<int:donation_id>/status/', views.donation_status, name='donation_status'),
]

# ========================================
# DONATION REQUESTS  (/donation-request/)
# ========================================
request_patterns = [
    path('', views.donation_requests, name='donation_requests'),
    path('user/', views.user_requests, name='donation_requests_user'),
    path('donor/', views.donor_requests, name='donation_requests_donor'),
    path('all-user/', views.all_user_requests, name='donation_requests_all_user'),
    path('<int:request_id>/', views.request_detail, name='donation_request_detail'),
    path('<int:request_id>/status/', views.request_status, name='donation_request_status'),
    path('<int:request_id>/update/', views.update_request, name='donation_request_update'),
    path('<int:request_id>/cancel/', views.cancel_request, name='donation_request_cancel'),
    path('<int:request_id>/complete/', views.complete_request, name='donation_request_complete'),
    path('<int:request_id>/fulfill/', views.fulfill_request, name='donation_request_fulfill'),
    path('<int:request_id>/respond/', views.respond_to_request, name='donation_request_respond'),
    path('<int:request_id>/matching-donors/', views.matching_donors, name='donation_request_matching_donors'),
]
