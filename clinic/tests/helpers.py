from datetime import datetime

from django.utils import timezone


def aware(*args) -> datetime:
    return timezone.make_aware(datetime(*args))


class FixedClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now
