from django.core.cache import cache
from django.db import connections
from django.http import JsonResponse


def healthz(request):
    """Liveness check: ``SELECT 1`` on every configured database, plus a cache round trip."""
    checks = {}
    try:
        for alias in connections:
            with connections[alias].cursor() as c:
                c.execute('SELECT 1')
                row = c.fetchone()
            checks[alias] = bool(row and row[0] == 1)
    except Exception as e:
        return JsonResponse({'ok': False, 'error': {'code': 'db_unavailable', 'message': str(e)}}, status=503)
    cache.set('healthz', 1, 5)
    return JsonResponse({'ok': all(checks.values()), 'db': checks, 'cache': cache.get('healthz') == 1})
