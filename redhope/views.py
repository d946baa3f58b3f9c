# redhope/views.py
import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    """Liveness probe: reports whether the database answers."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'connected'
        code = status.HTTP_200_OK
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        database = 'disconnected'
        code = status.HTTP_503_SERVICE_UNAVAILABLE

    return Response({
        'status': 'ok' if code == status.HTTP_200_OK else 'error',
        'database': database,
        'timestamp': timezone.now().isoformat(),
    }, status=code)
