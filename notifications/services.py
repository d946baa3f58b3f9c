# notifications/services.py
"""
Notification creation.

Notifications are a side effect of the donation workflows: a failure here
is logged and swallowed so the request that triggered it still succeeds.
"""
import logging

from django.db import DatabaseError, transaction

from .models import Notification

logger = logging.getLogger(__name__)


def notify(recipient, type, title, message, related_item=None, related_item_type='', priority='Normal'):
    """
    Create one notification, best effort.

    Args:
        recipient: User receiving the notification
        type: One of Notification.TYPE_CHOICES
        title, message: Display text
        related_item: Model instance the notification points at (optional)
        related_item_type: DonationRequest | Donation | User | Hospital
        priority: Low | Normal | High | Urgent

    Returns:
        The Notification, or None if it could not be stored
    """
    try:
        with transaction.atomic():
            return Notification.objects.create(
                recipient=recipient,
                type=type,
                title=title,
                message=message,
                related_item_type=related_item_type if related_item is not None else '',
                related_item_id=str(related_item.pk) if related_item is not None else '',
                priority=priority,
            )
    except DatabaseError:
        logger.exception(
            "Could not create %s notification for user %s",
            type, getattr(recipient, 'pk', recipient),
        )
        return None


def notify_many(recipients, **kwargs):
    """notify() each recipient; returns how many notifications were stored."""
    sent = 0
    for recipient in recipients:
        if notify(recipient, **kwargs) is not None:
            sent += 1
    return sent
