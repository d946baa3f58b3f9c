# notifications/models.py
from django.conf import settings
from django.db import models


class Notification(models.Model):
    TYPE_CHOICES = [
        ('DonationRequest', 'Donation Request'),
        ('DonationMatch', 'Donation Match'),
        ('DonationConfirmation', 'Donation Confirmation'),
        ('DonationReminder', 'Donation Reminder'),
        ('GeneralAlert', 'General Alert'),
    ]

    ITEM_TYPE_CHOICES = [
        ('DonationRequest', 'Donation Request'),
        ('Donation', 'Donation'),
        ('User', 'User'),
        ('Hospital', 'Hospital'),
    ]

    PRIORITY_CHOICES = [
        ('Low', 'Low'),
        ('Normal', 'Normal'),
        ('High', 'High'),
        ('Urgent', 'Urgent'),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()

    related_item_type = models.CharField(max_length=20, choices=ITEM_TYPE_CHOICES, blank=True)
    related_item_id = models.CharField(max_length=64, blank=True)

    is_read = models.BooleanField(default=False)
    is_archived = models.BooleanField(default=False)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='Normal')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'
        indexes = [models.Index(fields=['recipient', 'is_archived', '-created_at'])]

    def __str__(self):
        return f"{self.type} -> {self.recipient_id}: {self.title}"
