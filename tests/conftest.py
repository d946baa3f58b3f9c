import pytest
from rest_framework.test import APIClient

from accounts.models import AdminAccount, User
from accounts.tokens import get_tokens_for_account
from hospitals.models import Hospital
from wilayas.models import Wilaya

ALGIERS = (36.7538, 3.0588)
BLIDA = (36.4700, 2.8277)
ORAN = (35.6971, -0.6308)


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client():
    return APIClient()


def auth(client, account):
    """Attach a bearer token for account to client and return the client."""
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {get_tokens_for_account(account)['token']}")
    return client


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make_user(**fields):
        counter['n'] += 1
        n = counter['n']
        password = fields.pop('password', 'secret123')
        fields.setdefault('username', f'user{n}')
        fields.setdefault('email', f'user{n}@example.com')
        user = User(**fields)
        user.set_password(password)
        user.save()
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(username='amina', email='amina@example.com', blood_type='A+')


@pytest.fixture
def user_client(user):
    return auth(APIClient(), user)


@pytest.fixture
def make_admin(db):
    def _make_admin(username='boss', email='boss@redhope.org', password='adminpass', **flags):
        account = AdminAccount(username=username, email=email, **flags)
        account.set_password(password)
        account.save()
        return account

    return _make_admin


@pytest.fixture
def admin_account(make_admin):
    return make_admin()


@pytest.fixture
def admin_client(admin_account):
    return auth(APIClient(), admin_account)


@pytest.fixture
def wilaya(db):
    return Wilaya.objects.create(code='16', name='Alger', latitude=ALGIERS[0], longitude=ALGIERS[1])


@pytest.fixture
def hospital(wilaya):
    return Hospital.objects.create(
        name='CHU Mustapha Pacha',
        structure='CHU',
        wilaya='ALGER',
        latitude=ALGIERS[0],
        longitude=ALGIERS[1],
    )
