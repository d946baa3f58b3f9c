# accounts/models.py
import uuid

from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone

BLOOD_TYPE_CHOICES = [
    ('A+', 'A+'), ('A-', 'A-'),
    ('B+', 'B+'), ('B-', 'B-'),
    ('AB+', 'AB+'), ('AB-', 'AB-'),
    ('O+', 'O+'), ('O-', 'O-'),
]

ADMIN_ROLES = ('admin', 'superadmin')

# Flags a User promoted to role 'admin' gets without an AdminAccount row
DEFAULT_ADMIN_PERMISSIONS = ('manage_users', 'manage_hospitals', 'view_reports')

ADMIN_PERMISSION_FLAGS = (
    'manage_users',
    'manage_hospitals',
    'manage_content',
    'view_reports',
    'manage_admins',
)


class User(AbstractUser):
    ROLE_CHOICES = (
        ('user', 'User'),
        ('admin', 'Admin'),
        ('superadmin', 'Super Admin'),
    )

    GENDER_CHOICES = (
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)

    role = models.CharField(max_length=15, choices=ROLE_CHOICES, default='user')
    blood_type = models.CharField(
        max_length=7,
        choices=BLOOD_TYPE_CHOICES + [('Unknown', 'Unknown')],
        default='Unknown',
    )
    is_donor = models.BooleanField(default=False)

    phone_number = models.CharField(max_length=20, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    address = models.CharField(max_length=255, blank=True)

    # Location (degrees)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    city_id = models.CharField(max_length=10, blank=True, db_index=True)
    last_city_update = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-date_joined']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.username} ({self.role})"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES

    def has_admin_permission(self, flag):
        if self.role == 'superadmin':
            return True
        return self.role == 'admin' and flag in DEFAULT_ADMIN_PERMISSIONS

    def set_city(self, city_id):
        self.city_id = city_id
        self.last_city_update = timezone.now()


class AdminAccount(models.Model):
    """
    Administrator account kept apart from regular users.

    Works with DRF/simplejwt the same way a User does: it exposes
    is_authenticated and is_active, and its password is stored through
    Django's hashers.
    """
    ROLE_CHOICES = (
        ('admin', 'Admin'),
        ('superadmin', 'Super Admin'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    role = models.CharField(max_length=15, choices=ROLE_CHOICES, default='admin')

    # Permission flags
    manage_users = models.BooleanField(default=True)
    manage_hospitals = models.BooleanField(default=True)
    manage_content = models.BooleanField(default=False)
    view_reports = models.BooleanField(default=True)
    manage_admins = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)
    last_login = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Admin Account'
        verbose_name_plural = 'Admin Accounts'

    def __str__(self):
        return f"{self.username} ({self.role})"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False

    @property
    def is_admin(self):
        return True

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)

    def has_admin_permission(self, flag):
        if self.role == 'superadmin':
            return True
        return bool(getattr(self, flag, False))

    def permissions(self):
        return {flag: self.has_admin_permission(flag) for flag in ADMIN_PERMISSION_FLAGS}

    def record_login(self):
        self.last_login = timezone.now()
        self.save(update_fields=['last_login'])
