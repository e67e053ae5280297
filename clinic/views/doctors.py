from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.directory import format_doctor, list_doctors


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_directory(request):
    """Doctors a patient can book, optionally filtered by ``departmentId``."""
    dept = request.query_params.get('departmentId')
    try:
        dept_id = int(dept) if dept else None
    except ValueError:
        return Response({'ok': False, 'error': {'code': 'invalid', 'message': 'departmentId must be an integer.'}},
                        status=400)
    return Response({'ok': True, 'data': [format_doctor(d) for d in list_doctors(dept_id)]})
