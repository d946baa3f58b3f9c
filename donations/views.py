# donations/views.py
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import is_admin_account
from redhope.pagination import get_page_params, paginate_queryset, paginated_response
from . import services
from .matching import donor_payload, find_nearby_donors
from .models import Donation, DonationRequest
from .serializers import (
    DonationCreateSerializer,
    DonationRequestSerializer,
    DonationRequestWriteSerializer,
    DonationSerializer,
    DonationStatusSerializer,
    DonorResponseSerializer,
    DonorResponseWriteSerializer,
    RequestStatusSerializer,
)

User = get_user_model()


def _current_user(request):
    """Donation workflows act on regular users; admin accounts cannot take part."""
    if not isinstance(request.user, User):
        raise PermissionDenied('Only user accounts can take part in donations')
    return request.user


def _donations():
    return Donation.objects.select_related('donor', 'recipient', 'hospital')


def _requests():
    return DonationRequest.objects.select_related('requester', 'donor', 'hospital').prefetch_related('responses__donor')


def _require_active(donation_request, action):
    if not donation_request.is_active:
        raise ValidationError(
            f"Cannot {action} a donation request that is {donation_request.status.lower()}"
        )


def _require_requester(donation_request, user, action):
    if donation_request.requester_id != user.pk:
        raise PermissionDenied(f"Not authorized to {action} this donation request")


# ============================================
# DONATIONS
# ============================================
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_donation(request):
    """The current user schedules a donation to a recipient at a hospital."""
    donor = _current_user(request)
    serializer = DonationCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    donation = services.create_donation(donor, serializer.validated_data)
    return Response(
        {'success': True, 'message': 'Donation scheduled', 'data': DonationSerializer(donation).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_donations(request):
    user = _current_user(request)
    donations = _donations().filter(Q(donor=user) | Q(recipient=user)).order_by('-created_at')
    data = DonationSerializer(donations, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def donation_detail(request, donation_id):
    user = _current_user(request)
    donation = get_object_or_404(_donations(), pk=donation_id)
    if not donation.involves(user):
        raise PermissionDenied('Not authorized')
    return Response({'success': True, 'data': DonationSerializer(donation).data})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def donation_status(request, donation_id):
    user = _current_user(request)
    serializer = DonationStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    donation = get_object_or_404(_donations(), pk=donation_id)
    if not donation.involves(user):
        raise PermissionDenied('Not authorized')

    donation = services.update_donation_status(donation, user, serializer.validated_data['status'])
    return Response({'success': True, 'data': DonationSerializer(donation).data})


# ============================================
# DONATION REQUESTS: CREATE / LIST
# ============================================
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def donation_requests(request):
    """
    GET: requests filtered by ?bloodType and ?status (default Active),
    Active ones past their expiry hidden, paginated
    POST: create a request as the current user
    """
    if request.method == 'POST':
        requester = _current_user(request)
        serializer = DonationRequestWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        donation_request = services.create_donation_request(requester, serializer.validated_data)
        return Response(
            {
                'success': True,
                'message': 'Donation request created',
                'data': DonationRequestSerializer(services.get_request_or_404(donation_request.pk)).data,
            },
            status=status.HTTP_201_CREATED,
        )

    wanted_status = request.query_params.get('status') or 'Active'
    queryset = _requests().filter(status=wanted_status)
    if wanted_status == 'Active':
        queryset = queryset.filter(expiry_date__gt=timezone.now())
    blood_type = request.query_params.get('bloodType')
    if blood_type:
        queryset = queryset.filter(blood_type=blood_type)

    return paginate_queryset(request, queryset.order_by('-created_at'), DonationRequestSerializer)


def _request_list(queryset):
    data = DonationRequestSerializer(queryset.order_by('-created_at'), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_requests(request):
    """Requests made by the current user."""
    return _request_list(_requests().filter(requester_id=request.user.pk))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def donor_requests(request):
    """Requests assigned to the current user as donor."""
    return _request_list(_requests().filter(donor_id=request.user.pk))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def all_user_requests(request):
    user_id = request.user.pk
    return _request_list(_requests().filter(Q(requester_id=user_id) | Q(donor_id=user_id)))


# ============================================
# DONATION REQUESTS: SINGLE REQUEST
# ============================================
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def request_detail(request, request_id):
    donation_request = services.get_request_or_404(request_id)

    if request.method == 'DELETE':
        if donation_request.requester_id != request.user.pk and not is_admin_account(request.user):
            raise PermissionDenied('Not authorized to delete this donation request')
        donation_request.delete()
        return Response({'success': True, 'message': 'Donation request deleted successfully'})

    return Response({'success': True, 'data': DonationRequestSerializer(donation_request).data})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def request_status(request, request_id):
    serializer = RequestStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    donation_request = services.get_request_or_404(request_id)
    _require_requester(donation_request, request.user, 'update')

    donation_request = services.set_request_status(donation_request, serializer.validated_data['status'])
    return Response({'success': True, 'data': DonationRequestSerializer(donation_request).data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_request(request, request_id):
    donation_request = services.get_request_or_404(request_id)
    _require_requester(donation_request, request.user, 'update')
    _require_active(donation_request, 'update')

    serializer = DonationRequestWriteSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    donation_request = services.update_donation_request(donation_request, serializer.validated_data)

    return Response({
        'success': True,
        'message': 'Donation request updated successfully',
        'data': DonationRequestSerializer(services.get_request_or_404(donation_request.pk)).data,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def cancel_request(request, request_id):
    donation_request = services.get_request_or_404(request_id)
    _require_requester(donation_request, request.user, 'cancel')
    _require_active(donation_request, 'cancel')

    donation_request = services.set_request_status(donation_request, 'Cancelled')
    return Response({
        'success': True,
        'message': 'Donation request cancelled successfully',
        'data': DonationRequestSerializer(donation_request).data,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def complete_request(request, request_id):
    donation_request = services.get_request_or_404(request_id)
    if request.user.pk not in (donation_request.requester_id, donation_request.donor_id):
        raise PermissionDenied('Not authorized to complete this donation request')
    _require_active(donation_request, 'complete')

    donation_request = services.set_request_status(donation_request, 'Fulfilled')
    return Response({
        'success': True,
        'message': 'Donation request completed successfully',
        'data': DonationRequestSerializer(donation_request).data,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def fulfill_request(request, request_id):
    donation_request = services.get_request_or_404(request_id)
    user = request.user
    if not getattr(user, 'is_donor', False):
        raise PermissionDenied('Only donors can fulfill donation requests')
    _require_active(donation_request, 'fulfill')

    donation_request.fulfill(donor=user)
    donation_request.save()
    return Response({
        'success': True,
        'message': 'Donation request fulfilled successfully',
        'data': DonationRequestSerializer(donation_request).data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def respond_to_request(request, request_id):
    donor = _current_user(request)
    serializer = DonorResponseWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    donation_request = services.get_request_or_404(request_id)
    if donation_request.requester_id == donor.pk:
        raise ValidationError('You cannot respond to your own donation request')
    _require_active(donation_request, 'respond to')

    response = services.record_donor_response(donation_request, donor, serializer.validated_data['status'])
    return Response({'success': True, 'data': DonorResponseSerializer(response).data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def matching_donors(request, request_id):
    """Compatible donors ranked by distance from the request, requester excluded."""
    donation_request = services.get_request_or_404(request_id)
    if donation_request.latitude is None or donation_request.longitude is None:
        raise ValidationError('Donation request has no location')

    page, limit = get_page_params(request)
    ranked = find_nearby_donors(
        donation_request.latitude,
        donation_request.longitude,
        blood_type=donation_request.blood_type,
        exclude=donation_request.requester_id,
        page=page,
        limit=limit,
    )
    data = [donor_payload(user, distance) for user, distance in ranked.items]
    return paginated_response(data, ranked.total, page, limit)
