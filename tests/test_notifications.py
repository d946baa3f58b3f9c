import pytest
from django.db import DatabaseError

from notifications.models import Notification
from notifications.services import notify, notify_many

pytestmark = pytest.mark.django_db


@pytest.fixture
def inbox(user):
    return [
        notify(user, type='GeneralAlert', title=f'Alert {i}', message='Hello')
        for i in range(3)
    ]


def test_notify_links_related_item(user, hospital):
    notification = notify(
        user, type='GeneralAlert', title='New hospital', message='Open now',
        related_item=hospital, related_item_type='Hospital', priority='Low',
    )
    assert notification.related_item_type == 'Hospital'
    assert notification.related_item_id == str(hospital.pk)
    assert notification.priority == 'Low'
    assert notification.is_read is False


def test_notify_swallows_database_errors(user, monkeypatch):
    def broken(**kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(Notification.objects, 'create', broken)
    assert notify(user, type='GeneralAlert', title='x', message='y') is None


def test_notify_many_counts_stored(make_user):
    users = [make_user(), make_user()]
    assert notify_many(users, type='GeneralAlert', title='x', message='y') == 2
    assert Notification.objects.count() == 2


def test_list_newest_first_without_archived(user_client, inbox):
    inbox[0].is_archived = True
    inbox[0].save()

    response = user_client.get('/notification/')
    body = response.json()
    assert response.status_code == 200
    assert body['count'] == 2
    assert [n['title'] for n in body['data']] == ['Alert 2', 'Alert 1']
    assert body['data'][0]['relatedItem'] is None


def test_list_is_capped_at_fifty(user_client, user):
    for i in range(55):
        notify(user, type='GeneralAlert', title=f'n{i}', message='m')
    assert user_client.get('/notification/').json()['count'] == 50


def test_list_only_shows_own(user_client, make_user):
    notify(make_user(), type='GeneralAlert', title='Not yours', message='m')
    assert user_client.get('/notification/').json()['count'] == 0


def test_mark_as_read_and_unread_count(user_client, inbox, make_user):
    foreign = notify(make_user(), type='GeneralAlert', title='Not yours', message='m')

    assert user_client.get('/notification/unread-count/').json()['count'] == 3

    response = user_client.post('/notification/read/', {
        'notificationIds': [inbox[0].pk, inbox[1].pk, foreign.pk],
    }, format='json')
    assert response.status_code == 200
    assert response.json()['updated'] == 2

    foreign.refresh_from_db()
    assert foreign.is_read is False
    assert user_client.get('/notification/unread-count/').json()['count'] == 1


def test_archive(user_client, inbox):
    response = user_client.post('/notification/archive/', {'notificationIds': [inbox[2].pk]}, format='json')
    assert response.status_code == 200
    inbox[2].refresh_from_db()
    assert inbox[2].is_archived is True
    assert user_client.get('/notification/unread-count/').json()['count'] == 2


@pytest.mark.parametrize('payload', [{}, {'notificationIds': 5}, {'notificationIds': 'abc'}])
def test_ids_must_be_a_list(user_client, payload):
    response = user_client.post('/notification/read/', payload, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'notificationIds: notificationIds must be an array'


def test_notifications_need_login(api_client):
    assert api_client.get('/notification/').status_code == 401
