"""
Location parsing shim

Older records and clients send coordinates in several shapes:
    "36.75,3.05"                                   (lat,lng string)
    {"type": "Point", "coordinates": [3.05, 36.75]} (GeoJSON, lng first)
    {"lat": 36.75, "lng": 3.05} / {"latitude": ..., "longitude": ...}
    [36.75, 3.05]                                  (lat,lng pair)

Everything is normalised to a (latitude, longitude) tuple of floats.
"""

import math


def to_coordinate(value):
    """Return value as a finite float, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_coordinates(latitude, longitude):
    """
    Validate a latitude/longitude pair.

    Returns:
        (latitude, longitude) floats, or None when either is missing,
        non-numeric or out of range.
    """
    lat = to_coordinate(latitude)
    lng = to_coordinate(longitude)
    if lat is None or lng is None:
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def parse_location(value):
    """
    Parse any supported location encoding into (latitude, longitude).

    Returns None for free text and anything else that cannot be read.
    """
    if value is None:
        return None

    if isinstance(value, str):
        parts = value.split(',')
        if len(parts) != 2:
            return None
        return parse_coordinates(parts[0], parts[1])

    if isinstance(value, dict):
        if value.get('type') == 'Point' or 'coordinates' in value:
            coordinates = value.get('coordinates')
            if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 2:
                return None
            # GeoJSON order is [longitude, latitude]
            return parse_coordinates(coordinates[1], coordinates[0])
        if 'latitude' in value or 'longitude' in value:
            return parse_coordinates(value.get('latitude'), value.get('longitude'))
        return parse_coordinates(value.get('lat'), value.get('lng', value.get('lon')))

    if isinstance(value, (list, tuple)) and len(value) == 2:
        return parse_coordinates(value[0], value[1])

    return None


def to_geojson(latitude, longitude):
    """GeoJSON Point for a stored coordinate pair, or None."""
    if latitude is None or longitude is None:
        return None
    return {'type': 'Point', 'coordinates': [longitude, latitude]}
