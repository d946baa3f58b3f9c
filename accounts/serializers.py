# accounts/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from redhope.fields import LocationField, apply_location, location_of
from .models import ADMIN_PERMISSION_FLAGS, BLOOD_TYPE_CHOICES, AdminAccount

User = get_user_model()

USER_BLOOD_TYPES = [choice for choice, _ in BLOOD_TYPE_CHOICES] + ['Unknown']


class UserSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    bloodType = serializers.CharField(source='blood_type', read_only=True)
    isDonor = serializers.BooleanField(source='is_donor', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    isAdmin = serializers.BooleanField(source='is_admin', read_only=True)
    phoneNumber = serializers.CharField(source='phone_number', read_only=True)
    dateOfBirth = serializers.DateField(source='date_of_birth', read_only=True)
    cityId = serializers.CharField(source='city_id', read_only=True)
    lastCityUpdate = serializers.DateTimeField(source='last_city_update', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)
    location = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'firstName', 'lastName', 'role',
            'bloodType', 'isDonor', 'isActive', 'isAdmin', 'phoneNumber',
            'dateOfBirth', 'gender', 'address', 'latitude', 'longitude',
            'location', 'cityId', 'lastCityUpdate', 'createdAt',
        ]
        read_only_fields = fields

    def get_location(self, obj):
        return location_of(obj)


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user shape embedded in donations, requests and notifications."""
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    bloodType = serializers.CharField(source='blood_type', read_only=True)
    phoneNumber = serializers.CharField(source='phone_number', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'firstName', 'lastName', 'bloodType', 'phoneNumber']
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Fields a user may change on their own profile (and admins on any user)."""
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    firstName = serializers.CharField(source='first_name', max_length=150, required=False, allow_blank=True)
    lastName = serializers.CharField(source='last_name', max_length=150, required=False, allow_blank=True)
    bloodType = serializers.ChoiceField(source='blood_type', choices=USER_BLOOD_TYPES, required=False)
    isDonor = serializers.BooleanField(source='is_donor', required=False)
    phoneNumber = serializers.CharField(source='phone_number', max_length=20, required=False, allow_blank=True)
    dateOfBirth = serializers.DateField(source='date_of_birth', required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=User.GENDER_CHOICES, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)
    location = LocationField(required=False)
    cityId = serializers.CharField(source='city_id', max_length=10, required=False, allow_blank=True)

    def validate(self, attrs):
        attrs = apply_location(attrs)
        if ('latitude' in attrs) != ('longitude' in attrs):
            raise serializers.ValidationError('latitude and longitude must be given together')
        return attrs


class AdminUserUpdateSerializer(ProfileUpdateSerializer):
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)


class RegisterSerializer(ProfileUpdateSerializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)


class AdminUserCreateSerializer(RegisterSerializer):
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField()
    newPassword = serializers.CharField(min_length=6)
    confirmNewPassword = serializers.CharField()

    def validate(self, attrs):
        if attrs['newPassword'] != attrs['confirmNewPassword']:
            raise serializers.ValidationError({'confirmNewPassword': 'New password and confirmation do not match'})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    username = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField()

    def validate(self, attrs):
        identifier = (attrs.get('email') or attrs.get('username') or '').strip()
        if not identifier:
            raise serializers.ValidationError('Email or username is required')
        attrs['identifier'] = identifier
        return attrs


# ========================================
# ADMIN ACCOUNTS
# ========================================
class AdminAccountSerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    permissions = serializers.SerializerMethodField()

    class Meta:
        model = AdminAccount
        fields = ['id', 'username', 'email', 'role', 'permissions', 'isActive', 'lastLogin', 'createdAt']
        read_only_fields = fields

    def get_permissions(self, obj):
        return obj.permissions()


class AdminAccountWriteSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=6, required=False, write_only=True)
    role = serializers.ChoiceField(choices=AdminAccount.ROLE_CHOICES, required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)
    permissions = serializers.DictField(child=serializers.BooleanField(), required=False)

    def validate_permissions(self, value):
        unknown = set(value) - set(ADMIN_PERMISSION_FLAGS)
        if unknown:
            raise serializers.ValidationError(f"Unknown permission(s): {', '.join(sorted(unknown))}")
        return value

    def validate(self, attrs):
        if self.context.get('creating'):
            missing = [name for name in ('username', 'email', 'password') if not attrs.get(name)]
            if missing:
                raise serializers.ValidationError('Username, email, and password are required')
        return attrs
