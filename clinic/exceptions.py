from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

from clinic.services.errors import ClinicError

def api_exception_handler(exc, context):
    if isinstance(exc, ClinicError):
        return Response({'ok': False, 'error': {'code': exc.code, 'message': exc.message}}, status=exc.status_code)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        # let Django's 500 handling see unexpected errors
        return None
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
