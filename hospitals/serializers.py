# hospitals/serializers.py
from rest_framework import serializers

from redhope.fields import LocationField, apply_location, location_of
from .models import Hospital


class HospitalSerializer(serializers.ModelSerializer):
    wilayaCode = serializers.CharField(source='wilaya_code', read_only=True)
    location = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Hospital
        fields = [
            'id', 'name', 'structure', 'telephone', 'fax', 'wilaya', 'wilayaCode',
            'latitude', 'longitude', 'location', 'createdAt', 'updatedAt',
        ]

    def get_location(self, obj):
        return location_of(obj)


class HospitalWriteSerializer(serializers.ModelSerializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)
    location = LocationField(required=False, write_only=True)

    class Meta:
        model = Hospital
        fields = ['name', 'structure', 'telephone', 'fax', 'wilaya', 'latitude', 'longitude', 'location']

    def validate(self, attrs):
        attrs = apply_location(attrs)
        if 'wilaya' in attrs and self.instance is not None and attrs['wilaya'] != self.instance.wilaya:
            # Re-resolve the region for the new name
            attrs['region'] = None
        return attrs


class MapHospitalSerializer(serializers.ModelSerializer):
    """Marker shape used by the map endpoint."""
    position = serializers.SerializerMethodField()

    class Meta:
        model = Hospital
        fields = ['id', 'name', 'structure', 'wilaya', 'telephone', 'position']

    def get_position(self, obj):
        return {'lat': obj.latitude, 'lng': obj.longitude}
