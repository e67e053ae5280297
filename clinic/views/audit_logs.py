from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.admin import LogQuerySerializer
from clinic.services.audit import clear_events, format_event, log_action, search_events


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def audit_logs(request):
    """List audit events (``?q=`` substring, ``?take=`` limit) or clear them."""
    if request.method == 'DELETE':
        deleted = clear_events()
        log_action(user=request.user, action='logs_clear', object_type='audit', detail={'deleted': deleted})
        return Response({'ok': True, 'deleted': deleted})
    s = LogQuerySerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    take = s.validated_data.get('take') or getattr(settings, 'AUDIT_LOG_DEFAULT_TAKE', 200)
    events = search_events(s.validated_data.get('q'), take=take)
    return Response({'ok': True, 'data': [format_event(ev) for ev in events]})
