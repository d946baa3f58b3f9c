from datetime import timedelta

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import AdminAccount, User
from accounts.registry import find_account_by_email, find_account_by_id
from accounts.tokens import get_tokens_for_account
from tests.conftest import auth

pytestmark = pytest.mark.django_db


# ========================================
# REGISTER / LOGIN
# ========================================
def test_register_returns_tokens(api_client):
    response = api_client.post('/auth/register/', {
        'username': 'karim',
        'email': 'Karim@Example.com',
        'password': 'secret123',
        'bloodType': 'O-',
        'isDonor': True,
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['token'] and body['refreshToken']
    assert body['user']['email'] == 'karim@example.com'
    assert body['user']['role'] == 'user'

    user = User.objects.get(username='karim')
    assert user.blood_type == 'O-'
    assert user.is_donor is True
    assert user.check_password('secret123')


def test_register_short_password(api_client):
    response = api_client.post('/auth/register/', {
        'username': 'karim', 'email': 'karim@example.com', 'password': '123',
    }, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['success'] is False
    assert 'password' in body['errors']


def test_register_duplicate_email_conflicts(api_client, user):
    response = api_client.post('/auth/register/', {
        'username': 'someone', 'email': 'AMINA@example.com', 'password': 'secret123',
    }, format='json')

    assert response.status_code == 409
    assert response.json() == {'success': False, 'message': 'Email is already registered'}


def test_register_cannot_take_admin_username(api_client, admin_account):
    response = api_client.post('/auth/register/', {
        'username': admin_account.username, 'email': 'new@example.com', 'password': 'secret123',
    }, format='json')
    assert response.status_code == 409


def test_register_with_location_string(api_client):
    response = api_client.post('/auth/register/', {
        'username': 'sara', 'email': 'sara@example.com', 'password': 'secret123',
        'location': '36.75,3.05',
    }, format='json')

    assert response.status_code == 201
    user = User.objects.get(username='sara')
    assert (user.latitude, user.longitude) == (36.75, 3.05)


@pytest.mark.parametrize('identifier', ['amina@example.com', 'AMINA@EXAMPLE.COM', 'amina'])
def test_login_with_email_or_username(api_client, user, identifier):
    field = 'email' if '@' in identifier else 'username'
    response = api_client.post('/auth/login/', {field: identifier, 'password': 'secret123'}, format='json')

    assert response.status_code == 200
    body = response.json()
    assert body['user']['id'] == str(user.pk)
    assert body['user']['isAdmin'] is False


def test_login_wrong_password(api_client, user):
    response = api_client.post('/auth/login/', {'email': user.email, 'password': 'nope'}, format='json')
    assert response.status_code == 401
    assert response.json() == {'success': False, 'message': 'Invalid credentials'}


def test_login_requires_identifier(api_client):
    response = api_client.post('/auth/login/', {'password': 'secret123'}, format='json')
    assert response.status_code == 400


def test_login_admin_account(api_client, admin_account):
    response = api_client.post('/auth/login/', {
        'email': admin_account.email, 'password': 'adminpass',
    }, format='json')

    assert response.status_code == 200
    assert response.json()['user']['isAdmin'] is True
    admin_account.refresh_from_db()
    assert admin_account.last_login is not None


def test_login_inactive_admin(api_client, make_admin):
    make_admin(is_active=False)
    response = api_client.post('/auth/login/', {'email': 'boss@redhope.org', 'password': 'adminpass'}, format='json')
    assert response.status_code == 401


def test_logout(api_client):
    response = api_client.post('/auth/logout/')
    assert response.status_code == 200
    assert response.json()['success'] is True


# ========================================
# TOKENS
# ========================================
def test_token_authenticates_profile(user_client, user):
    response = user_client.get('/user/profile/')
    assert response.status_code == 200
    assert response.json()['user']['username'] == user.username


def test_missing_token_is_401(api_client):
    response = api_client.get('/user/profile/')
    assert response.status_code == 401
    assert response.json()['success'] is False


def test_garbage_token_is_401(api_client):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    response = api_client.get('/user/profile/')
    assert response.status_code == 401


def test_expired_token_is_401(api_client, user):
    token = AccessToken.for_user(user)
    token['role'] = user.role
    token.set_exp(lifetime=-timedelta(seconds=5))
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    response = api_client.get('/user/profile/')
    assert response.status_code == 401
    assert response.json()['success'] is False


def test_token_of_deleted_user_is_401(api_client, user):
    auth(api_client, user)
    user.delete()
    response = api_client.get('/user/profile/')
    assert response.status_code == 401


def test_refresh_token(api_client, user):
    refresh = get_tokens_for_account(user)['refreshToken']
    response = api_client.post('/auth/refresh-token/', {'refreshToken': refresh}, format='json')

    assert response.status_code == 200
    body = response.json()
    assert body['token'] and body['refreshToken']
    assert body['user']['id'] == str(user.pk)


def test_refresh_token_missing(api_client):
    response = api_client.post('/auth/refresh-token/', {}, format='json')
    assert response.status_code == 400


def test_refresh_token_invalid(api_client):
    response = api_client.post('/auth/refresh-token/', {'refreshToken': 'garbage'}, format='json')
    assert response.status_code == 401


def test_registry_finds_both_account_kinds(user, admin_account):
    assert find_account_by_id(user.pk, 'user') == user
    assert find_account_by_id(admin_account.pk, 'admin') == admin_account
    assert find_account_by_id(admin_account.pk, 'user') is None
    assert find_account_by_id('not-a-uuid') is None
    assert find_account_by_email('BOSS@redhope.org') == admin_account


def test_promoted_user_token_resolves_to_user(api_client, make_user):
    promoted = make_user(role='admin')
    response = auth(api_client, promoted).get('/admin/profile/')
    assert response.status_code == 200
    assert response.json()['admin']['id'] == str(promoted.pk)


# ========================================
# PROFILE
# ========================================
def test_update_profile(user_client, user):
    response = user_client.put('/user/profile/', {
        'firstName': 'Amina',
        'isDonor': True,
        'cityId': '16',
        'location': {'type': 'Point', 'coordinates': [3.05, 36.75]},
    }, format='json')

    assert response.status_code == 200
    user.refresh_from_db()
    assert user.first_name == 'Amina'
    assert user.is_donor is True
    assert user.city_id == '16'
    assert user.last_city_update is not None
    assert (user.latitude, user.longitude) == (36.75, 3.05)
    assert response.json()['user']['location'] == {'type': 'Point', 'coordinates': [3.05, 36.75]}


def test_update_profile_username_taken(user_client, make_user):
    make_user(username='taken')
    response = user_client.put('/user/profile/', {'username': 'taken'}, format='json')
    assert response.status_code == 409


def test_update_profile_invalid_location(user_client):
    response = user_client.put('/user/profile/', {'location': 'somewhere nice'}, format='json')
    assert response.status_code == 400
    assert 'Invalid location' in response.json()['message']


def test_update_profile_needs_both_coordinates(user_client, user):
    user.latitude, user.longitude = 36.75, 3.05
    user.save()

    response = user_client.put('/user/profile/', {'latitude': 35.7}, format='json')
    assert response.status_code == 400

    user.refresh_from_db()
    assert (user.latitude, user.longitude) == (36.75, 3.05)


def test_change_password(user_client, user):
    response = user_client.put('/user/change-password/', {
        'currentPassword': 'secret123',
        'newPassword': 'newsecret',
        'confirmNewPassword': 'newsecret',
    }, format='json')

    assert response.status_code == 200
    user.refresh_from_db()
    assert user.check_password('newsecret')


def test_change_password_wrong_current(user_client):
    response = user_client.put('/user/change-password/', {
        'currentPassword': 'wrong',
        'newPassword': 'newsecret',
        'confirmNewPassword': 'newsecret',
    }, format='json')
    assert response.status_code == 400


def test_change_password_mismatch(user_client):
    response = user_client.put('/user/change-password/', {
        'currentPassword': 'secret123',
        'newPassword': 'newsecret',
        'confirmNewPassword': 'other',
    }, format='json')
    assert response.status_code == 400


def test_delete_account(user_client, user):
    response = user_client.delete('/user/account/')
    assert response.status_code == 200
    assert not User.objects.filter(pk=user.pk).exists()


def test_admin_account_cannot_use_user_profile(admin_client):
    response = admin_client.get('/user/profile/')
    assert response.status_code == 400


# ========================================
# ADMIN API
# ========================================
def test_admin_endpoints_reject_regular_users(user_client):
    assert user_client.get('/admin/profile/').status_code == 403
    assert user_client.get('/admin/users/').status_code == 403


def test_admin_profile(admin_client, admin_account):
    response = admin_client.get('/admin/profile/')
    assert response.status_code == 200
    permissions = response.json()['admin']['permissions']
    assert permissions['manage_users'] is True
    assert permissions['manage_admins'] is False


def test_admin_stats(admin_client, make_user):
    make_user(is_donor=True)
    make_user()
    response = admin_client.get('/admin/stats/')
    body = response.json()
    assert response.status_code == 200
    assert body['totalUsers'] == 2
    assert body['totalDonors'] == 1
    assert body['totalAdmins'] == 1


def test_admin_without_flag_is_403(api_client, make_admin):
    limited = make_admin(manage_users=False)
    response = auth(api_client, limited).get('/admin/users/')
    assert response.status_code == 403
    assert 'manage_users' in response.json()['message']


def test_admin_lists_and_filters_users(admin_client, make_user):
    make_user(username='donor1', blood_type='O+', is_donor=True)
    make_user(username='plain', blood_type='A+')

    response = admin_client.get('/admin/users/', {'isDonor': 'true'})
    body = response.json()
    assert response.status_code == 200
    assert [u['username'] for u in body['data']] == ['donor1']
    assert body['pagination']['totalItems'] == 1

    response = admin_client.get('/admin/users/', {'search': 'pla'})
    assert [u['username'] for u in response.json()['data']] == ['plain']


def test_admin_creates_updates_and_deletes_user(admin_client):
    response = admin_client.post('/admin/users/', {
        'username': 'newbie', 'email': 'newbie@example.com', 'password': 'secret123', 'role': 'user',
    }, format='json')
    assert response.status_code == 201
    user_id = response.json()['user']['id']

    response = admin_client.put(f'/admin/users/{user_id}/', {'isActive': False}, format='json')
    assert response.status_code == 200
    assert response.json()['user']['isActive'] is False

    response = admin_client.delete(f'/admin/users/{user_id}/')
    assert response.status_code == 200
    assert not User.objects.filter(pk=user_id).exists()


@pytest.mark.parametrize('role', ['admin', 'superadmin'])
def test_admin_without_manage_admins_cannot_grant_admin_role(admin_client, role):
    response = admin_client.post('/admin/users/', {
        'username': 'climber', 'email': 'climber@example.com', 'password': 'secret123', 'role': role,
    }, format='json')

    assert response.status_code == 403
    assert 'manage_admins' in response.json()['message']
    assert not User.objects.filter(username='climber').exists()


def test_admin_without_manage_admins_cannot_promote_or_touch_admins(admin_client, user, make_user):
    response = admin_client.put(f'/admin/users/{user.pk}/', {'role': 'superadmin'}, format='json')
    assert response.status_code == 403
    user.refresh_from_db()
    assert user.role == 'user'

    promoted = make_user(role='superadmin')
    assert admin_client.put(f'/admin/users/{promoted.pk}/', {'isActive': False}, format='json').status_code == 403
    assert admin_client.delete(f'/admin/users/{promoted.pk}/').status_code == 403
    assert User.objects.filter(pk=promoted.pk).exists()


def test_admin_with_manage_admins_can_grant_admin_role(api_client, make_admin):
    root = make_admin(username='root', email='root@redhope.org', manage_admins=True)
    response = auth(api_client, root).post('/admin/users/', {
        'username': 'deputy', 'email': 'deputy@example.com', 'password': 'secret123', 'role': 'admin',
    }, format='json')

    assert response.status_code == 201
    assert User.objects.get(username='deputy').role == 'admin'


def test_admin_user_not_found(admin_client):
    response = admin_client.get('/admin/users/00000000-0000-0000-0000-000000000000/')
    assert response.status_code == 404
    assert response.json()['success'] is False


def test_manage_admin_accounts(api_client, make_admin):
    root = make_admin(username='root', email='root@redhope.org', role='superadmin')
    client = auth(api_client, root)

    response = client.post('/admin/accounts/', {
        'username': 'helper',
        'email': 'helper@redhope.org',
        'password': 'helperpass',
        'permissions': {'manage_content': True, 'manage_users': False},
    }, format='json')
    assert response.status_code == 201
    created = AdminAccount.objects.get(username='helper')
    assert created.manage_content is True
    assert created.manage_users is False
    assert created.check_password('helperpass')

    response = client.post('/admin/accounts/', {
        'username': 'helper', 'email': 'other@redhope.org', 'password': 'helperpass',
    }, format='json')
    assert response.status_code == 409

    response = client.put(f'/admin/accounts/{created.pk}/', {'role': 'superadmin'}, format='json')
    assert response.status_code == 200
    assert response.json()['admin']['permissions']['manage_admins'] is True

    listing = client.get('/admin/accounts/').json()
    assert listing['pagination']['totalItems'] == 2

    assert client.delete(f'/admin/accounts/{root.pk}/').status_code == 400
    assert client.delete(f'/admin/accounts/{created.pk}/').status_code == 200


def test_create_admin_account_requires_fields(api_client, make_admin):
    root = make_admin(role='superadmin')
    response = auth(api_client, root).post('/admin/accounts/', {'username': 'x'}, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Username, email, and password are required'


def test_unknown_permission_flag(api_client, make_admin):
    root = make_admin(role='superadmin')
    response = auth(api_client, root).post('/admin/accounts/', {
        'username': 'x', 'email': 'x@redhope.org', 'password': 'secret123',
        'permissions': {'fly': True},
    }, format='json')
    assert response.status_code == 400
