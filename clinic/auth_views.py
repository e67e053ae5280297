"""
Login endpoint.

Issues a DRF token for the ``Token`` header alongside a simplejwt pair.
The authentication class lives in ``clinic.authentication`` so DRF can
import it during settings initialisation without importing views.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from clinic.models import Doctor, Patient
from clinic.serializers.auth import LoginSerializer
from clinic.throttles import LoginRateThrottle
from clinic.services.audit import log_action


def _profile_ids(user) -> dict:
    patient = Patient.objects.filter(user=user).only('id').first()
    doctor = Doctor.objects.filter(user=user).only('id').first()
    return {
        'patientId': patient.id if patient else None,
        'doctorId': doctor.id if doctor else None,
    }


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """Username/password login; the role always comes from the stored user."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate(request, username=vd['username'], password=vd['password'])
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'username': vd['username'], 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'error': {'code': 'invalid_credentials',
                                                'message': 'Invalid username or password.'}}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)

    return Response({
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': {
            'id': user.id,
            'username': user.username,
            'name': user.get_full_name() or user.username,
            'role': user.role,
            **_profile_ids(user),
        },
    }, status=200)

