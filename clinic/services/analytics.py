"""
Aggregations behind the admin dashboard charts and KPI cards.

Every query returns a small named record with fixed fields; ``as_dict``
gives the JSON shape the chart front end consumes.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from django.db.models import Avg, Count, Q
from django.utils import timezone

from clinic.models import AnalyticsRecord, Appointment, Doctor, Feedback, Patient

APPOINTMENTS_SCHEDULED = 'AppointmentsScheduled'
AVERAGE_RATING = 'AverageRating'


class _Record:
    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WeeklyCount(_Record):
    label: str
    count: int
    week_start: date


@dataclass(frozen=True)
class DoctorRating(_Record):
    doctor_id: int
    doctor: str
    average: float


@dataclass(frozen=True)
class SentimentBreakdown(_Record):
    positive: int
    neutral: int
    negative: int


@dataclass(frozen=True)
class StatusBreakdown(_Record):
    scheduled: int
    confirmed: int
    completed: int
    cancelled: int
    rejected: int


@dataclass(frozen=True)
class KpiSummary(_Record):
    total_doctors: int
    total_patients: int
    total_appointments: int
    appointments_last_7_days: int
    average_rating: float


@dataclass(frozen=True)
class MetricPoint(_Record):
    metric: str
    value: float
    recorded_at: datetime


def week_label(week_start: date) -> str:
    week_end = week_start + timedelta(days=6)
    return f"{week_start:%b %d} – {week_end:%b %d}"


class AnalyticsAggregator:

    def __init__(self, using: Optional[str] = None, clock: Optional[Callable[[], datetime]] = None):
        self.using = using
        self.clock = clock or timezone.now

    def _appointments(self):
        return Appointment.objects.db_manager(self.using).all()

    def _feedback(self):
        return Feedback.objects.db_manager(self.using).all()

    def average_feedback_rating(self) -> float:
        avg = self._feedback().aggregate(avg=Avg('rating'))['avg']
        return float(avg) if avg is not None else 0.0

    def weekly_appointment_counts(self) -> list[WeeklyCount]:
        """Count appointments per ISO week, oldest week first.

        Buckets are keyed on the ISO (year, week) of each appointment's
        local date, so weeks spanning New Year stay in one bucket and
        ordering is chronological across years.
        """
        buckets: dict[tuple[int, int], int] = {}
        for when in self._appointments().values_list('date', flat=True).iterator():
            iso = timezone.localtime(when).date().isocalendar()
            key = (iso[0], iso[1])
            buckets[key] = buckets.get(key, 0) + 1
        result = []
        for (year, week) in sorted(buckets):
            monday = date.fromisocalendar(year, week, 1)
            result.append(WeeklyCount(label=week_label(monday), count=buckets[(year, week)], week_start=monday))
        return result

    def doctor_ratings(self) -> list[DoctorRating]:
        rows = (
            Doctor.objects.db_manager(self.using)
            .annotate(avg_rating=Avg('feedbacks__rating'), n=Count('feedbacks'))
            .filter(n__gt=0)
            .order_by('name', 'id')
        )
        return [DoctorRating(doctor_id=d.id, doctor=d.name, average=float(d.avg_rating)) for d in rows]

    def feedback_sentiment(self) -> SentimentBreakdown:
        agg = self._feedback().aggregate(
            positive=Count('id', filter=Q(rating__gte=4)),
            neutral=Count('id', filter=Q(rating=3)),
            negative=Count('id', filter=Q(rating__lte=2)),
        )
        return SentimentBreakdown(**agg)

    def status_breakdown(self) -> StatusBreakdown:
        counts = {
            row['status']: row['n']
            for row in self._appointments().order_by().values('status').annotate(n=Count('id'))
        }
        return StatusBreakdown(
            scheduled=counts.get(Appointment.STATUS_SCHEDULED, 0),
            confirmed=counts.get(Appointment.STATUS_CONFIRMED, 0),
            completed=counts.get(Appointment.STATUS_COMPLETED, 0),
            cancelled=counts.get(Appointment.STATUS_CANCELLED, 0),
            rejected=counts.get(Appointment.STATUS_REJECTED, 0),
        )

    def appointments_since(self, days: int = 7) -> int:
        since = self.clock() - timedelta(days=days)
        return self._appointments().filter(created_at__gte=since).count()

    def kpis(self) -> KpiSummary:
        return KpiSummary(
            total_doctors=Doctor.objects.db_manager(self.using).count(),
            total_patients=Patient.objects.db_manager(self.using).count(),
            total_appointments=self._appointments().count(),
            appointments_last_7_days=self.appointments_since(7),
            average_rating=self.average_feedback_rating(),
        )

    # -- precomputed metrics feed ---------------------------------------

    def recent_records(self, days: int = 7) -> list[MetricPoint]:
        qs = AnalyticsRecord.objects.db_manager(self.using).order_by('-recorded_at', '-id')[:max(0, days)]
        return [MetricPoint(metric=r.metric_name, value=r.value, recorded_at=r.recorded_at) for r in qs]

    def metric_trend(self, metric_name: str = APPOINTMENTS_SCHEDULED) -> list[MetricPoint]:
        qs = AnalyticsRecord.objects.db_manager(self.using).filter(metric_name=metric_name).order_by('recorded_at', 'id')
        return [MetricPoint(metric=r.metric_name, value=r.value, recorded_at=r.recorded_at) for r in qs]

    def record_metric(self, metric_name: str, value: float, recorded_at: Optional[datetime] = None) -> AnalyticsRecord:
        return AnalyticsRecord.objects.db_manager(self.using).create(
            metric_name=metric_name, value=float(value), recorded_at=recorded_at or self.clock()
        )

    def snapshot(self) -> list[AnalyticsRecord]:
        """Record the current scheduled count and average rating."""
        now = self.clock()
        scheduled = self._appointments().filter(status=Appointment.STATUS_SCHEDULED).count()
        return [
            self.record_metric(APPOINTMENTS_SCHEDULED, scheduled, now),
            self.record_metric(AVERAGE_RATING, self.average_feedback_rating(), now),
        ]
