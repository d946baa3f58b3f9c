# stats/views.py
from django.contrib.auth import get_user_model
from django.db.models import Count
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from algorithms.blood_compatibility import BLOOD_TYPES
from donations.models import Donation, DonationRequest
from hospitals.models import Hospital

User = get_user_model()

# Donor counts at or above these thresholds
STABLE_DONORS = 10
LOW_DONORS = 5


def supply_level(donor_count):
    if donor_count >= STABLE_DONORS:
        return 'stable'
    if donor_count >= LOW_DONORS:
        return 'low'
    return 'critical'


def _count_by(queryset, field):
    return {row[field]: row['total'] for row in queryset.order_by().values(field).annotate(total=Count('pk'))}


def donor_counts():
    counts = _count_by(User.objects.filter(is_donor=True), 'blood_type')
    return {blood_type: counts.get(blood_type, 0) for blood_type in BLOOD_TYPES}


def blood_supply():
    return {blood_type: supply_level(count) for blood_type, count in donor_counts().items()}


def user_stats():
    return {
        'totalUsers': User.objects.count(),
        'totalDonors': User.objects.filter(is_donor=True).count(),
        'byRole': _count_by(User.objects.all(), 'role'),
    }


def donation_stats():
    by_status = _count_by(Donation.objects.all(), 'status')
    requests_by_status = _count_by(DonationRequest.objects.all(), 'status')
    return {
        'totalDonations': sum(by_status.values()),
        'pendingRequests': by_status.get('Requested', 0) + by_status.get('Scheduled', 0),
        'completedDonations': by_status.get('Completed', 0),
        'cancelledDonations': by_status.get('Cancelled', 0),
        'byStatus': by_status,
        'activeRequests': requests_by_status.get('Active', 0),
        'requestsByStatus': requests_by_status,
    }


# ========================================
# AUTHENTICATED
# ========================================
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def users(request):
    return Response({'success': True, **user_stats()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def donations(request):
    return Response({'success': True, **donation_stats()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Everything the dashboard shows in one call."""
    return Response({
        'success': True,
        'stats': {
            **user_stats(),
            **donation_stats(),
            'totalHospitals': Hospital.objects.count(),
            'bloodSupply': blood_supply(),
        },
        'lastUpdated': timezone.now(),
    })


# ========================================
# PUBLIC
# ========================================
@api_view(['GET'])
@permission_classes([AllowAny])
def blood_supply_view(request):
    """Per blood type: critical (<5 donors), low (5-9) or stable (10+)."""
    return Response({'success': True, 'data': blood_supply()})


@api_view(['GET'])
@permission_classes([AllowAny])
def blood_types(request):
    donors = donor_counts()
    all_users = _count_by(User.objects.all(), 'blood_type')
    data = [
        {'bloodType': blood_type, 'donors': donors[blood_type], 'users': all_users.get(blood_type, 0)}
        for blood_type in BLOOD_TYPES
    ]
    return Response({'success': True, 'data': data})
