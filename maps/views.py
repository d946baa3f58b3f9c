# maps/views.py
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from donations.matching import donor_payload, find_nearby_donors
from hospitals.models import Hospital
from hospitals.serializers import MapHospitalSerializer
from redhope.geo import origin_from_query, positive_number
from redhope.pagination import get_page_params, paginated_response

User = get_user_model()


@api_view(['GET'])
@permission_classes([AllowAny])
def hospitals(request):
    """Hospital markers; hospitals without coordinates are left off the map."""
    queryset = Hospital.objects.filter(latitude__isnull=False, longitude__isnull=False).order_by('name')
    wilaya = request.query_params.get('wilaya')
    if wilaya:
        queryset = queryset.filter(wilaya__iexact=wilaya)

    locations = MapHospitalSerializer(queryset, many=True).data
    return Response({'success': True, 'count': len(locations), 'data': {'locations': locations}})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def donors(request):
    """
    Donors ranked by distance from ?latitude/?longitude.

    Optional ?bloodType keeps only donors compatible with it and ?maxDistance
    (km) bounds the search. The caller is never listed.
    """
    latitude, longitude = origin_from_query(request)
    page, limit = get_page_params(request)
    max_distance = positive_number(request.query_params.get('maxDistance'), None)

    ranked = find_nearby_donors(
        latitude,
        longitude,
        blood_type=request.query_params.get('bloodType') or None,
        exclude=request.user.pk if isinstance(request.user, User) else None,
        page=page,
        limit=limit,
        max_distance=max_distance,
    )
    data = [donor_payload(user, distance) for user, distance in ranked.items]
    return paginated_response(data, ranked.total, page, limit)


@api_view(['GET'])
@permission_classes([AllowAny])
def status(request):
    return Response({
        'status': 'ok',
        'message': 'Map API is operational',
        'timestamp': timezone.now().isoformat(),
    })
