# wilayas/serializers.py
from rest_framework import serializers

from .models import BloodCenter, Wilaya


class BloodCenterSerializer(serializers.ModelSerializer):
    class Meta:
        model = BloodCenter
        fields = ['id', 'name', 'latitude', 'longitude']


class TaggedBloodCenterSerializer(BloodCenterSerializer):
    """Blood center listed outside its wilaya, tagged with the wilaya it belongs to."""
    wilaya = serializers.CharField(source='wilaya.name', read_only=True)
    wilayaCode = serializers.CharField(source='wilaya.code', read_only=True)

    class Meta(BloodCenterSerializer.Meta):
        fields = BloodCenterSerializer.Meta.fields + ['wilaya', 'wilayaCode']


class WilayaSerializer(serializers.ModelSerializer):
    bloodCenters = BloodCenterSerializer(source='blood_centers', many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Wilaya
        fields = ['id', 'code', 'name', 'latitude', 'longitude', 'bloodCenters', 'createdAt', 'updatedAt']
