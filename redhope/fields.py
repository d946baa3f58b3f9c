# redhope/fields.py
from rest_framework import serializers

from algorithms.location import parse_location, to_geojson


class LocationField(serializers.Field):
    """
    Accepts a location in any supported shape ("lat,lng", GeoJSON Point,
    {lat, lng} or {latitude, longitude}) and yields a (lat, lng) tuple.
    Renders as a GeoJSON Point.
    """
    default_error_messages = {
        'invalid': 'Invalid location. Expected "lat,lng", a GeoJSON Point or {{latitude, longitude}}.',
    }

    def to_internal_value(self, data):
        coordinates = parse_location(data)
        if coordinates is None:
            self.fail('invalid')
        return coordinates

    def to_representation(self, value):
        if value is None:
            return None
        return to_geojson(*value)


def apply_location(validated_data):
    """Move a parsed 'location' onto latitude/longitude keys, in place."""
    location = validated_data.pop('location', None)
    if location is not None:
        validated_data['latitude'], validated_data['longitude'] = location
    return validated_data


def location_of(instance):
    return to_geojson(instance.latitude, instance.longitude)
