# wilayas/views.py
from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from algorithms.haversine import within_radius
from redhope.geo import filter_bounding_box, origin_from_query, positive_number
from .models import BloodCenter, Wilaya
from .serializers import BloodCenterSerializer, TaggedBloodCenterSerializer, WilayaSerializer

DEFAULT_NEARBY_DISTANCE_KM = 100


def _wilayas():
    return Wilaya.objects.prefetch_related('blood_centers').order_by('name')


@api_view(['GET'])
@permission_classes([AllowAny])
def wilaya_list(request):
    wilayas = _wilayas()
    return Response({
        'success': True,
        'count': len(wilayas),
        'data': WilayaSerializer(wilayas, many=True).data,
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def nearby_wilayas(request):
    """Wilayas within ?distance km (default 100) of the given point, nearest first."""
    latitude, longitude = origin_from_query(request)
    distance = positive_number(request.query_params.get('distance'), DEFAULT_NEARBY_DISTANCE_KM)

    candidates = filter_bounding_box(_wilayas(), latitude, longitude, distance)
    nearby = within_radius(latitude, longitude, candidates, distance)

    data = []
    for wilaya, km in nearby:
        item = WilayaSerializer(wilaya).data
        item['distance'] = round(km, 2)
        data.append(item)

    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def all_blood_centers(request):
    centers = BloodCenter.objects.select_related('wilaya').order_by('wilaya__name', 'name')
    return Response({
        'success': True,
        'count': len(centers),
        'data': TaggedBloodCenterSerializer(centers, many=True).data,
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def wilaya_detail(request, code):
    wilaya = get_object_or_404(_wilayas(), code=code)
    return Response({'success': True, 'data': WilayaSerializer(wilaya).data})


@api_view(['GET'])
@permission_classes([AllowAny])
def wilaya_blood_centers(request, code):
    wilaya = get_object_or_404(Wilaya, code=code)
    centers = wilaya.blood_centers.all()
    return Response({
        'success': True,
        'wilaya': wilaya.name,
        'count': len(centers),
        'data': BloodCenterSerializer(centers, many=True).data,
    })
