# donations/services.py
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from algorithms.location import parse_coordinates
from hospitals.models import Hospital
from notifications.services import notify, notify_many
from .matching import find_nearby_donors
from .models import Donation, DonationRequest, DonorResponse

User = get_user_model()

logger = logging.getLogger(__name__)

# Donors notified about a request with no assigned donor
BROADCAST_LIMIT = 20


def _user_or_404(user_id, message):
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFound(message)
    return user


def _hospital_or_404(hospital_id):
    hospital = Hospital.objects.filter(pk=hospital_id).first()
    if hospital is None:
        raise NotFound('Hospital not found')
    return hospital


# ============================================
# DONATIONS
# ============================================
@transaction.atomic
def create_donation(donor, data):
    recipient = _user_or_404(data['recipientId'], 'Recipient not found')
    hospital = _hospital_or_404(data['hospitalId'])

    donation = Donation(
        donor=donor,
        recipient=recipient,
        hospital=hospital,
        blood_type=data['bloodType'],
        notes=data.get('notes', ''),
        emergency_level=data.get('emergencyLevel', 'Medium'),
    )
    donation.transition_to('Scheduled', when=data['scheduledDate'])
    donation.save()

    notify(
        recipient,
        type='DonationConfirmation',
        title='Donation Scheduled',
        message=f"A donation has been scheduled for you on {data['scheduledDate']:%Y-%m-%d}",
        related_item=donation,
        related_item_type='Donation',
        priority='Urgent' if donation.emergency_level == 'Critical' else 'High',
    )
    logger.info("Donation %s scheduled by donor %s", donation.pk, donor.pk)
    return donation


def update_donation_status(donation, user, status):
    donation.transition_to(status)
    donation.save()

    notify(
        donation.other_party(user),
        type='DonationMatch',
        title=f"Donation {status}",
        message=f"Your donation has been marked as {status.lower()}",
        related_item=donation,
        related_item_type='Donation',
    )
    return donation


# ============================================
# DONATION REQUESTS
# ============================================
def resolve_request_location(data, hospital, requester):
    """Location from the body, else the hospital, else the requester's profile."""
    for source in (data, hospital, requester):
        if source is None:
            continue
        if isinstance(source, dict):
            coordinates = parse_coordinates(source.get('latitude'), source.get('longitude'))
        else:
            coordinates = parse_coordinates(source.latitude, source.longitude)
        if coordinates is not None:
            return coordinates
    return None


def _apply_request_fields(donation_request, data):
    for field in ('blood_type', 'expiry_date', 'city_id', 'patient_name', 'urgency', 'notes'):
        if field in data:
            setattr(donation_request, field, data[field])

    if 'hospitalId' in data:
        donation_request.hospital = _hospital_or_404(data['hospitalId']) if data['hospitalId'] else None
    if 'donorId' in data:
        donation_request.donor = _user_or_404(data['donorId'], 'Selected donor not found') if data['donorId'] else None
    if 'latitude' in data:
        donation_request.latitude = data['latitude']
        donation_request.longitude = data['longitude']


def create_donation_request(requester, data):
    donation_request = DonationRequest(requester=requester, status='Active')
    _apply_request_fields(donation_request, data)

    coordinates = resolve_request_location(data, donation_request.hospital, requester)
    if coordinates is None:
        raise ValidationError('A location is required: send one, pick a hospital with coordinates or set it on your profile')
    donation_request.latitude, donation_request.longitude = coordinates

    if not donation_request.city_id:
        donation_request.city_id = requester.city_id

    donation_request.save()
    logger.info("Donation request %s created by %s", donation_request.pk, requester.pk)

    notify_donors_of_request(donation_request)
    return donation_request


def notify_donors_of_request(donation_request):
    """Assigned donor gets an Urgent notice; otherwise the nearest compatible donors get High."""
    blood_type = donation_request.blood_type
    common = {
        'type': 'DonationRequest',
        'title': f"Blood Donation Need: {blood_type}",
        'message': f"Someone needs {blood_type} blood donation. Can you help?",
        'related_item': donation_request,
        'related_item_type': 'DonationRequest',
    }

    if donation_request.donor_id:
        return notify_many([donation_request.donor], priority='Urgent', **common)

    ranked = find_nearby_donors(
        donation_request.latitude,
        donation_request.longitude,
        blood_type=blood_type,
        exclude=donation_request.requester_id,
        limit=BROADCAST_LIMIT,
    )
    return notify_many([donor for donor, _ in ranked.items], priority='High', **common)


def update_donation_request(donation_request, data):
    _apply_request_fields(donation_request, data)
    donation_request.save()
    return donation_request


def set_request_status(donation_request, status):
    if status == 'Fulfilled':
        donation_request.fulfill()
    elif status == 'Cancelled':
        donation_request.cancel()
    else:
        donation_request.status = status
    donation_request.save()
    return donation_request


def record_donor_response(donation_request, donor, status):
    """Store (or overwrite) the donor's response and tell the requester."""
    response, _ = DonorResponse.objects.update_or_create(
        request=donation_request,
        donor=donor,
        defaults={'status': status, 'responded_at': timezone.now()},
    )

    notify(
        donation_request.requester,
        type='DonationMatch',
        title=f"Donor {status.lower()}",
        message=f"{donor.username} responded to your {donation_request.blood_type} request: {status}",
        related_item=donation_request,
        related_item_type='DonationRequest',
        priority='High' if status == 'Confirmed' else 'Normal',
    )
    return response


def get_request_or_404(request_id):
    return get_object_or_404(
        DonationRequest.objects.select_related('requester', 'donor', 'hospital').prefetch_related('responses__donor'),
        pk=request_id,
    )


def expire_requests(now=None):
    """Mark Active requests past their expiry date as Expired; returns the count."""
    now = now or timezone.now()
    expired = DonationRequest.objects.filter(status='Active', expiry_date__lte=now).update(
        status='Expired', updated_at=now,
    )
    if expired:
        logger.info("Expired %d donation request(s)", expired)
    return expired
