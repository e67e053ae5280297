"""
Per-endpoint rate limits.  Rates come from ``DEFAULT_THROTTLE_RATES``.
"""
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    """Keyed on client IP, since login happens before authentication."""
    scope = 'login'


class BookingRateThrottle(UserRateThrottle):
    scope = 'booking'
