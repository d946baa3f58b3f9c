# hospitals/views.py
import logging

import pandas as pd
from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.permissions import AdminPermissionOrReadOnly, HasAdminPermission
from algorithms.haversine import within_radius
from redhope.geo import filter_bounding_box, origin_from_query, positive_number
from redhope.pagination import paginate_queryset
from .models import Hospital
from .serializers import HospitalSerializer, HospitalWriteSerializer

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    'name': 'name',
    'wilaya': 'wilaya',
    'structure': 'structure',
    'createdAt': 'created_at',
}

DEFAULT_MAX_DISTANCE_M = 10000

EXPORT_COLUMNS = ['id', 'name', 'structure', 'wilaya', 'telephone', 'fax', 'latitude', 'longitude']


def _hospitals():
    return Hospital.objects.select_related('region')


# ============================================
# LIST / CREATE
# ============================================
@api_view(['GET', 'POST'])
@permission_classes([AdminPermissionOrReadOnly('manage_hospitals')])
def hospital_list(request):
    """
    GET: paginated list with ?search, ?sort (name|wilaya|structure|createdAt)
    and ?order (asc|desc)
    POST: create a hospital (manage_hospitals)
    """
    if request.method == 'POST':
        serializer = HospitalWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hospital = serializer.save()
        logger.info("Hospital %s created by %s", hospital.pk, request.user.username)
        return Response(
            {'success': True, 'message': 'Hospital created successfully', 'data': HospitalSerializer(hospital).data},
            status=status.HTTP_201_CREATED,
        )

    queryset = _hospitals()

    search = request.query_params.get('search', '').strip()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) | Q(wilaya__icontains=search) | Q(structure__icontains=search)
        )

    sort_field = SORT_FIELDS.get(request.query_params.get('sort'), 'name')
    descending = request.query_params.get('order', 'asc').lower() in ('desc', '-1')
    queryset = queryset.order_by(f"-{sort_field}" if descending else sort_field, 'pk')

    return paginate_queryset(request, queryset, HospitalSerializer)


@api_view(['GET'])
@permission_classes([AllowAny])
def hospitals_by_wilaya(request, wilaya):
    hospitals = _hospitals().filter(wilaya__iexact=wilaya.strip()).order_by('name')
    return Response({
        'success': True,
        'count': len(hospitals),
        'data': HospitalSerializer(hospitals, many=True).data,
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def nearby_hospitals(request):
    """Hospitals within ?maxDistance meters (default 10000), nearest first."""
    latitude, longitude = origin_from_query(request)
    radius_km = positive_number(request.query_params.get('maxDistance'), DEFAULT_MAX_DISTANCE_M) / 1000

    candidates = filter_bounding_box(_hospitals(), latitude, longitude, radius_km)
    nearby = within_radius(latitude, longitude, candidates, radius_km)

    data = []
    for hospital, distance in nearby:
        item = HospitalSerializer(hospital).data
        item['distance'] = round(distance, 2)
        data.append(item)

    return Response({'success': True, 'count': len(data), 'data': data})


# ============================================
# DETAIL / UPDATE / DELETE
# ============================================
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AdminPermissionOrReadOnly('manage_hospitals')])
def hospital_detail(request, hospital_id):
    hospital = get_object_or_404(_hospitals(), pk=hospital_id)

    if request.method == 'DELETE':
        hospital.delete()
        logger.info("Hospital %s deleted by %s", hospital_id, request.user.username)
        return Response({'success': True, 'message': 'Hospital deleted successfully'})

    if request.method == 'PUT':
        serializer = HospitalWriteSerializer(hospital, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        hospital = serializer.save()
        return Response({
            'success': True,
            'message': 'Hospital updated successfully',
            'data': HospitalSerializer(hospital).data,
        })

    return Response({'success': True, 'data': HospitalSerializer(hospital).data})


@api_view(['GET'])
@permission_classes([HasAdminPermission('manage_hospitals')])
def export_hospitals(request):
    """Download every hospital as CSV."""
    rows = list(Hospital.objects.order_by('name').values(*EXPORT_COLUMNS))
    frame = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    response = HttpResponse(frame.to_csv(index=False), content_type='text/csv')
    filename = f"hospitals-{timezone.now():%Y%m%d}.csv"
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
