# redhope/geo.py
"""Query-string and ORM helpers shared by the location-aware endpoints."""
from rest_framework.exceptions import ValidationError

from algorithms.haversine import bounding_box
from algorithms.location import parse_coordinates, to_coordinate


def origin_from_query(request):
    """(latitude, longitude) from ?latitude=&longitude= (or lat/lng); 400 when missing."""
    params = request.query_params
    coordinates = parse_coordinates(
        params.get('latitude', params.get('lat')),
        params.get('longitude', params.get('lng')),
    )
    if coordinates is None:
        raise ValidationError('Valid latitude and longitude are required')
    return coordinates


def positive_number(value, default):
    number = to_coordinate(value)
    if number is None or number <= 0:
        return default
    return number


def filter_bounding_box(queryset, latitude, longitude, radius_km):
    """Narrow a queryset with latitude/longitude columns to the radius' bounding box."""
    min_lat, max_lat, min_lon, max_lon = bounding_box(latitude, longitude, radius_km)
    queryset = queryset.filter(latitude__gte=min_lat, latitude__lte=max_lat)

    if min_lon < -180 or max_lon > 180:
        # Window crosses the antimeridian; only latitude narrows it
        return queryset.filter(longitude__isnull=False)
    return queryset.filter(longitude__gte=min_lon, longitude__lte=max_lon)
