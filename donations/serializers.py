# donations/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import BLOOD_TYPE_CHOICES
from accounts.serializers import UserSummarySerializer
from hospitals.models import Hospital
from redhope.fields import LocationField, apply_location, location_of
from .models import URGENCY_CHOICES, Donation, DonationRequest, DonorResponse

User = get_user_model()


class HospitalSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Hospital
        fields = ['id', 'name', 'structure', 'telephone', 'wilaya']


# ============================================
# DONATIONS
# ============================================
class DonationSerializer(serializers.ModelSerializer):
    donor = UserSummarySerializer(read_only=True)
    recipient = UserSummarySerializer(read_only=True)
    hospital = HospitalSummarySerializer(read_only=True)
    bloodType = serializers.CharField(source='blood_type')
    emergencyLevel = serializers.CharField(source='emergency_level')
    requestDate = serializers.DateTimeField(source='request_date')
    scheduledDate = serializers.DateTimeField(source='scheduled_date')
    completedDate = serializers.DateTimeField(source='completed_date')
    cancelledDate = serializers.DateTimeField(source='cancelled_date')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Donation
        fields = [
            'id', 'donor', 'recipient', 'hospital', 'bloodType', 'status', 'emergencyLevel',
            'notes', 'requestDate', 'scheduledDate', 'completedDate', 'cancelledDate',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class DonationCreateSerializer(serializers.Serializer):
    recipientId = serializers.UUIDField()
    hospitalId = serializers.IntegerField()
    bloodType = serializers.ChoiceField(choices=BLOOD_TYPE_CHOICES)
    scheduledDate = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    emergencyLevel = serializers.ChoiceField(choices=URGENCY_CHOICES, required=False, default='Medium')


class DonationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Donation.STATUS_CHOICES)


# ============================================
# DONATION REQUESTS
# ============================================
class DonorResponseSerializer(serializers.ModelSerializer):
    donor = UserSummarySerializer(read_only=True)
    respondedAt = serializers.DateTimeField(source='responded_at', read_only=True)

    class Meta:
        model = DonorResponse
        fields = ['id', 'donor', 'status', 'respondedAt']
        read_only_fields = fields


class DonationRequestSerializer(serializers.ModelSerializer):
    requester = UserSummarySerializer(read_only=True)
    donor = UserSummarySerializer(read_only=True)
    hospital = HospitalSummarySerializer(read_only=True)
    responses = DonorResponseSerializer(many=True, read_only=True)
    patientName = serializers.CharField(source='patient_name')
    bloodType = serializers.CharField(source='blood_type')
    cityId = serializers.CharField(source='city_id')
    location = serializers.SerializerMethodField()
    expiryDate = serializers.DateTimeField(source='expiry_date')
    fulfilledAt = serializers.DateTimeField(source='fulfilled_at')
    cancelledAt = serializers.DateTimeField(source='cancelled_at')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = DonationRequest
        fields = [
            'id', 'requester', 'donor', 'hospital', 'patientName', 'bloodType', 'urgency',
            'status', 'latitude', 'longitude', 'location', 'cityId', 'expiryDate',
            'fulfilledAt', 'cancelledAt', 'notes', 'responses', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields

    def get_location(self, obj):
        return location_of(obj)


class DonationRequestWriteSerializer(serializers.Serializer):
    """Input for creating and updating donation requests."""
    bloodType = serializers.ChoiceField(source='blood_type', choices=BLOOD_TYPE_CHOICES + [('Any', 'Any')])
    hospitalId = serializers.IntegerField(required=False, allow_null=True)
    donorId = serializers.UUIDField(required=False, allow_null=True)
    expiryDate = serializers.DateTimeField(source='expiry_date', required=False)
    cityId = serializers.CharField(source='city_id', max_length=10, required=False, allow_blank=True)
    patientName = serializers.CharField(source='patient_name', max_length=200, required=False, allow_blank=True)
    urgency = serializers.ChoiceField(choices=URGENCY_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False)
    location = LocationField(required=False)

    def validate(self, attrs):
        attrs = apply_location(attrs)
        if ('latitude' in attrs) != ('longitude' in attrs):
            raise serializers.ValidationError('latitude and longitude must be given together')
        return attrs


class RequestStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[('Active', 'Active'), ('Fulfilled', 'Fulfilled'), ('Cancelled', 'Cancelled')])


class DonorResponseWriteSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DonorResponse.STATUS_CHOICES)
