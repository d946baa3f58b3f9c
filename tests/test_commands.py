import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.models import AdminAccount
from hospitals.models import Hospital
from tests.conftest import ALGIERS, BLIDA
from wilayas.models import BloodCenter, Wilaya

pytestmark = pytest.mark.django_db


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


@pytest.fixture
def wilaya_file(tmp_path):
    path = tmp_path / 'wilayas.json'
    path.write_text(json.dumps([
        {
            'code': 16, 'name': 'Alger', 'latitude': ALGIERS[0], 'longitude': ALGIERS[1],
            'blood_centers': [{'name': 'CTS Alger', 'latitude': 36.76, 'longitude': 3.05}],
        },
        {'code': 9, 'name': 'Blida', 'latitude': BLIDA[0], 'longitude': BLIDA[1]},
        {'code': 99, 'name': 'Nowhere', 'latitude': None, 'longitude': None},
    ]))
    return path


# ========================================
# import_wilayas
# ========================================
def test_import_wilayas(wilaya_file):
    output = run('import_wilayas', str(wilaya_file))

    assert '2 created, 0 updated, 1 skipped' in output
    assert set(Wilaya.objects.values_list('code', flat=True)) == {'16', '09'}
    assert BloodCenter.objects.get().wilaya.code == '16'


def test_import_wilayas_twice_updates(wilaya_file):
    run('import_wilayas', str(wilaya_file))
    output = run('import_wilayas', str(wilaya_file))

    assert '0 created, 2 updated' in output
    assert Wilaya.objects.count() == 2
    assert BloodCenter.objects.count() == 1


def test_import_wilayas_missing_file():
    with pytest.raises(CommandError):
        run('import_wilayas', '/no/such/file.json')


def test_import_wilayas_unsupported_type(tmp_path):
    path = tmp_path / 'wilayas.txt'
    path.write_text('nothing')
    with pytest.raises(CommandError):
        run('import_wilayas', str(path))


# ========================================
# import_hospitals
# ========================================
@pytest.fixture
def hospital_file(tmp_path):
    path = tmp_path / 'hospitals.csv'
    path.write_text(
        'name,structure,wilaya,telephone,latitude,longitude\n'
        'CHU Mustapha,CHU,ALGER,021 23 55 55,36.761,3.055\n'
        'EPH Sans GPS,EPH,Blida,,,\n'
        ',EPH,Blida,,36.4,2.8\n'
    )
    return path


def test_import_hospitals(hospital_file, wilaya_file):
    run('import_wilayas', str(wilaya_file))
    output = run('import_hospitals', str(hospital_file))

    assert 'Created:  2 new hospitals' in output
    assert 'Skipped:  1 rows' in output

    mustapha = Hospital.objects.get(name='CHU Mustapha')
    assert mustapha.wilaya == 'ALGER'
    assert mustapha.wilaya_code == '16'
    assert mustapha.telephone == '021 23 55 55'
    assert (mustapha.latitude, mustapha.longitude) == (36.761, 3.055)

    no_gps = Hospital.objects.get(name='EPH Sans GPS')
    assert no_gps.latitude is None


def test_import_hospitals_updates_existing(hospital_file):
    run('import_hospitals', str(hospital_file))
    output = run('import_hospitals', str(hospital_file))

    assert 'Updated:  2 existing hospitals' in output
    assert Hospital.objects.count() == 2


def test_import_hospitals_clear(hospital_file):
    Hospital.objects.create(name='Old', wilaya='Oran')
    run('import_hospitals', str(hospital_file), clear=True)
    assert not Hospital.objects.filter(name='Old').exists()


def test_import_hospitals_missing_columns(tmp_path):
    path = tmp_path / 'bad.csv'
    path.write_text('title,city\nX,Y\n')
    with pytest.raises(CommandError):
        run('import_hospitals', str(path))


# ========================================
# link_users_to_wilayas
# ========================================
def test_link_users_to_wilayas(wilaya_file, make_user):
    run('import_wilayas', str(wilaya_file))
    near = make_user(latitude=36.70, longitude=3.10)
    desert = make_user(latitude=27.0, longitude=5.0)
    settled = make_user(latitude=36.70, longitude=3.10, city_id='31')
    unknown = make_user()

    output = run('link_users_to_wilayas')
    assert 'Linked 1 user(s), 1 without a wilaya nearby' in output

    near.refresh_from_db()
    desert.refresh_from_db()
    settled.refresh_from_db()
    unknown.refresh_from_db()
    assert near.city_id == '16'
    assert near.last_city_update is not None
    assert desert.city_id == ''
    assert settled.city_id == '31'
    assert unknown.city_id == ''

    run('link_users_to_wilayas', overwrite=True)
    settled.refresh_from_db()
    assert settled.city_id == '16'


def test_link_users_needs_wilayas():
    with pytest.raises(CommandError):
        run('link_users_to_wilayas')


# ========================================
# create_superadmin
# ========================================
def test_create_superadmin_is_idempotent():
    output = run('create_superadmin', email='Root@RedHope.org', username='root', password='rootpass')
    assert 'created successfully' in output

    account = AdminAccount.objects.get()
    assert account.email == 'root@redhope.org'
    assert account.role == 'superadmin'
    assert account.manage_admins is True
    assert account.check_password('rootpass')

    output = run('create_superadmin', email='root@redhope.org', username='root', password='rootpass')
    assert 'already exists' in output
    assert AdminAccount.objects.count() == 1


def test_create_superadmin_short_password():
    with pytest.raises(CommandError):
        run('create_superadmin', email='root@redhope.org', username='root', password='123')
