# notifications/views.py
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Notification
from .serializers import NotificationIdsSerializer, NotificationSerializer

LIST_LIMIT = 50


def _own_notifications(request):
    # Admin accounts have no notifications; the filter then matches nothing
    return Notification.objects.filter(recipient_id=request.user.pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """The 50 newest non-archived notifications of the current user."""
    notifications = _own_notifications(request).filter(is_archived=False).order_by('-created_at', '-pk')[:LIST_LIMIT]
    data = NotificationSerializer(notifications, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


def _update_selected(request, **changes):
    serializer = NotificationIdsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    ids = serializer.validated_data['notificationIds']
    return _own_notifications(request).filter(pk__in=ids).update(**changes)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_as_read(request):
    updated = _update_selected(request, is_read=True)
    return Response({'success': True, 'message': 'Notifications marked as read', 'updated': updated})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def archive(request):
    updated = _update_selected(request, is_archived=True)
    return Response({'success': True, 'message': 'Notifications archived', 'updated': updated})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    count = _own_notifications(request).filter(is_read=False, is_archived=False).count()
    return Response({'success': True, 'count': count})
