from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.services.analytics import AnalyticsAggregator
from clinic.views.analytics import PAYLOAD_NAMES, build_payload, cache_key


class Command(BaseCommand):
    help = "Record AppointmentsScheduled / AverageRating snapshots and warm the analytics cache."

    def add_arguments(self, parser):
        parser.add_argument('--no-warm', action='store_true', help='Only record the snapshot.')

    def handle(self, *args, **options):
        now = timezone.now()
        records = AnalyticsAggregator().snapshot()
        for r in records:
            self.stdout.write(f"{r.metric_name} = {r.value}")

        keys_refreshed = []
        if not options['no_warm']:
            for name in PAYLOAD_NAMES:
                build_payload(name)
                keys_refreshed.append(cache_key(name))

        self.stdout.write(self.style.SUCCESS(
            f"Recorded {len(records)} metrics, refreshed {len(keys_refreshed)} keys at {now}"
        ))
