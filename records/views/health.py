from django.db import connections
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..exceptions import UnexpectedError


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except Exception as exc:
        raise UnexpectedError(f'database unavailable: {exc}') from exc
    return Response({'success': True, 'status': 'ok', 'db': bool(row and row[0] == 1)})
