"""
Admin dashboard analytics.

Payloads are cached for ``ANALYTICS_CACHE_SECONDS``; ``snapshot_metrics``
drops the cached keys after recording new values.
"""
from django.conf import settings
from django.core.cache import cache
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.services.analytics import AnalyticsAggregator

CACHE_PREFIX = 'analytics:'


def cache_key(name: str) -> str:
    return f'{CACHE_PREFIX}{name}'


def _payloads():
    agg = AnalyticsAggregator()
    return {
        'kpis': lambda: agg.kpis().as_dict(),
        'weekly': lambda: [w.as_dict() for w in agg.weekly_appointment_counts()],
        'ratings': lambda: [r.as_dict() for r in agg.doctor_ratings()],
        'sentiment': lambda: agg.feedback_sentiment().as_dict(),
        'status': lambda: agg.status_breakdown().as_dict(),
        'trend': lambda: [p.as_dict() for p in agg.metric_trend()],
    }


PAYLOAD_NAMES = ('kpis', 'weekly', 'ratings', 'sentiment', 'status', 'trend')


def build_payload(name: str) -> dict:
    payload = {'ok': True, 'data': _payloads()[name]()}
    cache.set(cache_key(name), payload, getattr(settings, 'ANALYTICS_CACHE_SECONDS', 300))
    return payload


def _cached(name: str) -> Response:
    cached = cache.get(cache_key(name))
    if cached:
        return Response(cached)
    return Response(build_payload(name))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def kpis(request):
    return _cached('kpis')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def weekly_appointments(request):
    return _cached('weekly')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def doctor_ratings(request):
    return _cached('ratings')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def sentiment(request):
    return _cached('sentiment')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def status_breakdown(request):
    return _cached('status')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def metric_trend(request):
    return _cached('trend')
