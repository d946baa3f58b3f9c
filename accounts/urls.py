from django.urls import path

from . import views

# ========================================
# AUTHENTICATION  (/auth/)
# ========================================
auth_patterns = [
    path('register/', views.register, name='register'),
    path('signup/', views.register, name='signup'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('refresh-token/', views.refresh_token, name='refresh_token'),
]

# ========================================
# CURRENT USER  (/user/)
# ========================================
user_patterns = [
    path('profile/', views.profile, name='user_profile'),
    path('change-password/', views.change_password, name='change_password'),
    path('account/', views.delete_account, name='delete_account'),
]

# ========================================
# ADMIN API  (/admin/)
# ========================================
admin_patterns = [
    path('profile/', views.admin_profile, name='admin_profile'),
    path('stats/', views.admin_stats, name='admin_stats'),
    path('accounts/', views.admin_accounts, name='admin_accounts'),
    path('accounts/<uuid:account_id>/', views.admin_account_detail, name='admin_account_detail'),
    path('users/', views.admin_users, name='admin_users'),
    path('users/<uuid:user_id>/', views.admin_user_detail, name='admin_user_detail'),
]
