import pytest
from django.db import IntegrityError
from rest_framework.exceptions import NotFound

from donations.models import Donation, DonationRequest
from redhope.exceptions import ConflictError, api_exception_handler
from stats.views import supply_level

pytestmark = pytest.mark.django_db


@pytest.fixture
def donors(make_user):
    for _ in range(10):
        make_user(blood_type='O+', is_donor=True)
    for _ in range(5):
        make_user(blood_type='A+', is_donor=True)
    make_user(blood_type='B-', is_donor=True)
    make_user(blood_type='AB+')


@pytest.mark.parametrize('count, level', [(0, 'critical'), (4, 'critical'), (5, 'low'), (9, 'low'), (10, 'stable')])
def test_supply_level(count, level):
    assert supply_level(count) == level


def test_blood_supply(api_client, donors):
    response = api_client.get('/stats/blood-supply/')
    data = response.json()['data']

    assert response.status_code == 200
    assert data['O+'] == 'stable'
    assert data['A+'] == 'low'
    assert data['B-'] == 'critical'
    assert data['AB+'] == 'critical'
    assert len(data) == 8


def test_blood_types(api_client, donors):
    data = {row['bloodType']: row for row in api_client.get('/stats/blood-types/').json()['data']}
    assert data['O+']['donors'] == 10
    assert data['AB+'] == {'bloodType': 'AB+', 'donors': 0, 'users': 1}


def test_user_stats_need_login(api_client):
    assert api_client.get('/stats/users/').status_code == 401


def test_user_stats(user_client, donors):
    body = user_client.get('/stats/users/').json()
    # 17 from the fixture plus the logged-in user
    assert body['totalUsers'] == 18
    assert body['totalDonors'] == 16
    assert body['byRole'] == {'user': 18}


def test_donation_stats(user_client, user, make_user, hospital):
    donor = make_user(blood_type='O-', is_donor=True)
    Donation.objects.create(donor=donor, recipient=user, hospital=hospital, blood_type='O-', status='Scheduled')
    Donation.objects.create(donor=donor, recipient=user, hospital=hospital, blood_type='O-', status='Completed')
    DonationRequest.objects.create(requester=user, blood_type='A+', latitude=1, longitude=1)

    body = user_client.get('/stats/donations/').json()
    assert body['totalDonations'] == 2
    assert body['pendingRequests'] == 1
    assert body['completedDonations'] == 1
    assert body['activeRequests'] == 1


def test_dashboard(user_client, hospital):
    body = user_client.get('/stats/dashboard/').json()
    assert body['stats']['totalHospitals'] == 1
    assert body['stats']['totalUsers'] == 1
    assert set(body['stats']['bloodSupply'].values()) == {'critical'}


# ========================================
# HEALTH & ERROR ENVELOPE
# ========================================
def test_health(api_client):
    body = api_client.get('/health/').json()
    assert body['status'] == 'ok'
    assert body['database'] == 'connected'


def test_unknown_route_is_404(api_client):
    assert api_client.get('/no-such-route/').status_code == 404


def test_integrity_error_becomes_409():
    response = api_exception_handler(IntegrityError('UNIQUE constraint failed'), {})
    assert response.status_code == 409
    assert response.data['success'] is False


def test_conflict_error_message():
    response = api_exception_handler(ConflictError('Email is already registered'), {})
    assert response.status_code == 409
    assert response.data == {'success': False, 'message': 'Email is already registered'}


def test_not_found_envelope():
    response = api_exception_handler(NotFound('Hospital not found'), {})
    assert response.data == {'success': False, 'message': 'Hospital not found'}


def test_unhandled_error_hides_trace_without_debug(settings):
    settings.DEBUG = False
    response = api_exception_handler(RuntimeError('boom'), {})
    assert response.status_code == 500
    assert response.data == {'success': False, 'message': 'Server error'}


def test_unhandled_error_shows_trace_in_debug(settings):
    settings.DEBUG = True
    response = api_exception_handler(RuntimeError('boom'), {})
    assert response.status_code == 500
    assert response.data['error'] == 'boom'
    assert response.data['trace']
