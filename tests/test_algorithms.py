import pytest

from algorithms.blood_compatibility import (
    BLOOD_TYPES,
    get_compatible_donors,
    get_compatible_recipients,
    is_compatible,
)
from algorithms.haversine import bounding_box, haversine_distance, within_radius
from algorithms.location import parse_coordinates, parse_location, to_geojson
from algorithms.ranking import count_pages, page_metadata, paginate, rank_by_distance


class Point:
    def __init__(self, name, latitude, longitude):
        self.name = name
        self.latitude = latitude
        self.longitude = longitude


# ========================================
# HAVERSINE
# ========================================
def test_distance_to_self_is_zero():
    assert haversine_distance(36.75, 3.05, 36.75, 3.05) == 0


def test_distance_is_symmetric():
    forward = haversine_distance(36.7538, 3.0588, 35.6971, -0.6308)
    backward = haversine_distance(35.6971, -0.6308, 36.7538, 3.0588)
    assert forward == pytest.approx(backward)


def test_algiers_to_oran():
    # Roughly 350 km as the crow flies
    assert haversine_distance(36.7538, 3.0588, 35.6971, -0.6308) == pytest.approx(352, abs=5)


def test_one_degree_of_latitude():
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(111.19, abs=0.1)


def test_bounding_box_contains_radius():
    min_lat, max_lat, min_lon, max_lon = bounding_box(36.75, 3.05, 50)
    assert min_lat < 36.75 < max_lat
    assert min_lon < 3.05 < max_lon
    assert haversine_distance(36.75, 3.05, max_lat, 3.05) == pytest.approx(50, abs=0.1)


def test_bounding_box_at_pole_spans_all_longitudes():
    _, _, min_lon, max_lon = bounding_box(90, 0, 10)
    assert (min_lon, max_lon) == (-180.0, 180.0)


def test_within_radius_sorts_and_filters():
    points = [
        Point('oran', 35.6971, -0.6308),
        Point('blida', 36.47, 2.8277),
        Point('algiers', 36.7538, 3.0588),
        Point('nowhere', None, None),
    ]
    nearby = within_radius(36.7538, 3.0588, points, 100)
    assert [p.name for p, _ in nearby] == ['algiers', 'blida']
    assert nearby[0][1] == 0


# ========================================
# BLOOD COMPATIBILITY
# ========================================
def test_o_negative_gives_to_everyone():
    assert all(is_compatible('O-', recipient) for recipient in BLOOD_TYPES)


def test_ab_positive_receives_from_everyone():
    assert sorted(get_compatible_donors('AB+')) == sorted(BLOOD_TYPES)


def test_o_negative_only_receives_o_negative():
    assert get_compatible_donors('O-') == ['O-']


@pytest.mark.parametrize('donor, recipient, expected', [
    ('A+', 'A+', True),
    ('A+', 'A-', False),
    ('B-', 'AB-', True),
    ('AB+', 'O+', False),
    ('O+', 'B+', True),
])
def test_is_compatible(donor, recipient, expected):
    assert is_compatible(donor, recipient) is expected


def test_unknown_recipient_type_matches_every_donor():
    assert sorted(get_compatible_donors('Any')) == sorted(BLOOD_TYPES)


def test_unknown_donor_type_is_never_compatible():
    assert not is_compatible('Unknown', 'AB+')


def test_donors_and_recipients_agree():
    for donor in BLOOD_TYPES:
        for recipient in get_compatible_recipients(donor):
            assert donor in get_compatible_donors(recipient)


def test_returned_list_is_a_copy():
    donors = get_compatible_donors('O-')
    donors.append('A+')
    assert get_compatible_donors('O-') == ['O-']


# ========================================
# LOCATION PARSING
# ========================================
@pytest.mark.parametrize('value', [
    '36.75,3.05',
    ' 36.75 , 3.05 ',
    {'type': 'Point', 'coordinates': [3.05, 36.75]},
    {'latitude': 36.75, 'longitude': 3.05},
    {'lat': '36.75', 'lng': '3.05'},
    [36.75, 3.05],
])
def test_parse_location_shapes(value):
    assert parse_location(value) == (36.75, 3.05)


@pytest.mark.parametrize('value', [
    None,
    'Algiers city centre',
    '',
    '95,3',
    {'type': 'Point', 'coordinates': [3.05]},
    {'lat': 'abc', 'lng': 3},
    [1, 2, 3],
])
def test_parse_location_rejects(value):
    assert parse_location(value) is None


def test_parse_coordinates_rejects_booleans_and_nan():
    assert parse_coordinates(True, 3) is None
    assert parse_coordinates('nan', 3) is None


def test_to_geojson_is_longitude_first():
    assert to_geojson(36.75, 3.05) == {'type': 'Point', 'coordinates': [3.05, 36.75]}
    assert to_geojson(None, 3.05) is None


# ========================================
# RANKING & PAGINATION
# ========================================
def test_count_pages():
    assert count_pages(0, 10) == 1
    assert count_pages(10, 10) == 1
    assert count_pages(11, 10) == 2


def test_page_metadata():
    assert page_metadata(25, 2, 10) == {
        'currentPage': 2,
        'totalPages': 3,
        'totalItems': 25,
        'itemsPerPage': 10,
    }


def test_paginate_list():
    page = paginate(list(range(25)), page=3, limit=10)
    assert page.items == [20, 21, 22, 23, 24]
    assert page.total == 25
    assert page.total_pages == 3


def test_paginate_past_the_end_is_empty():
    page = paginate([1, 2, 3], page=5, limit=10)
    assert page.items == []
    assert page.total == 3


def test_rank_by_distance_orders_and_pages():
    points = [
        Point('oran', 35.6971, -0.6308),
        Point('algiers', 36.7538, 3.0588),
        Point('bad', 'x', 3),
        Point('blida', 36.47, 2.8277),
    ]
    first = rank_by_distance(36.7538, 3.0588, points, page=1, limit=2)
    assert [p.name for p, _ in first.items] == ['algiers', 'blida']
    assert first.total == 3
    assert first.metadata()['totalPages'] == 2

    second = rank_by_distance(36.7538, 3.0588, points, page=2, limit=2)
    assert [p.name for p, _ in second.items] == ['oran']


def test_rank_by_distance_max_distance():
    points = [Point('oran', 35.6971, -0.6308), Point('blida', 36.47, 2.8277)]
    ranked = rank_by_distance(36.7538, 3.0588, points, max_distance=100)
    assert [p.name for p, _ in ranked.items] == ['blida']
    assert ranked.total == 1
