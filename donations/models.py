# donations/models.py
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.models import BLOOD_TYPE_CHOICES

URGENCY_CHOICES = [
    ('Low', 'Low'),
    ('Medium', 'Medium'),
    ('High', 'High'),
    ('Critical', 'Critical'),
]

REQUEST_EXPIRY_DAYS = 7


def default_expiry_date():
    return timezone.now() + timedelta(days=REQUEST_EXPIRY_DAYS)


class Donation(models.Model):
    STATUS_CHOICES = [
        ('Requested', 'Requested'),
        ('Scheduled', 'Scheduled'),
        ('Completed', 'Completed'),
        ('Cancelled', 'Cancelled'),
    ]

    # Status -> timestamp field set the first time the donation reaches it
    TRANSITION_DATES = {
        'Scheduled': 'scheduled_date',
        'Completed': 'completed_date',
        'Cancelled': 'cancelled_date',
    }

    donor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='donations_given'
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='donations_received'
    )
    hospital = models.ForeignKey(
        'hospitals.Hospital', on_delete=models.PROTECT, related_name='donations'
    )
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='Requested')
    emergency_level = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='Medium')
    notes = models.TextField(blank=True)

    request_date = models.DateTimeField(default=timezone.now)
    scheduled_date = models.DateTimeField(null=True, blank=True)
    completed_date = models.DateTimeField(null=True, blank=True)
    cancelled_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Donation'
        verbose_name_plural = 'Donations'

    def __str__(self):
        return f"{self.blood_type} donation {self.donor_id} -> {self.recipient_id} ({self.status})"

    def involves(self, user):
        return user.pk in (self.donor_id, self.recipient_id)

    def other_party(self, user):
        return self.recipient if user.pk == self.donor_id else self.donor

    def transition_to(self, status, when=None):
        """
        Move to status and stamp its date the first time it is reached.
        Repeating a transition keeps the original timestamp.
        """
        self.status = status
        field = self.TRANSITION_DATES.get(status)
        if field and getattr(self, field) is None:
            setattr(self, field, when or timezone.now())


class DonationRequest(models.Model):
    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Fulfilled', 'Fulfilled'),
        ('Expired', 'Expired'),
        ('Cancelled', 'Cancelled'),
    ]

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='donation_requests'
    )
    donor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_requests',
    )
    hospital = models.ForeignKey(
        'hospitals.Hospital',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donation_requests',
    )

    patient_name = models.CharField(max_length=200, blank=True)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES + [('Any', 'Any')])
    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='Medium')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='Active', db_index=True)

    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    city_id = models.CharField(max_length=10, blank=True, db_index=True)

    expiry_date = models.DateTimeField(default=default_expiry_date)
    fulfilled_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Donation Request'
        verbose_name_plural = 'Donation Requests'

    def __str__(self):
        return f"{self.blood_type} request by {self.requester_id} ({self.status})"

    @property
    def is_active(self):
        return self.status == 'Active'

    @property
    def is_expired(self):
        return self.expiry_date <= timezone.now()

    def fulfill(self, donor=None):
        if donor is not None:
            self.donor = donor
        self.status = 'Fulfilled'
        if self.fulfilled_at is None:
            self.fulfilled_at = timezone.now()

    def cancel(self):
        self.status = 'Cancelled'
        if self.cancelled_at is None:
            self.cancelled_at = timezone.now()


class DonorResponse(models.Model):
    STATUS_CHOICES = [
        ('Interested', 'Interested'),
        ('Confirmed', 'Confirmed'),
        ('Declined', 'Declined'),
    ]

    request = models.ForeignKey(DonationRequest, on_delete=models.CASCADE, related_name='responses')
    donor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='donor_responses'
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES)
    responded_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-responded_at']
        verbose_name = 'Donor Response'
        verbose_name_plural = 'Donor Responses'
        constraints = [
            models.UniqueConstraint(fields=['request', 'donor'], name='unique_donor_response'),
        ]

    def __str__(self):
        return f"{self.donor_id} {self.status} on request {self.request_id}"
