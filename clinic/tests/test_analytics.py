from datetime import date, timedelta

import pytest

from clinic.models import AnalyticsRecord, Appointment, Doctor, Feedback, Patient
from clinic.services.analytics import AnalyticsAggregator, week_label

from .helpers import FixedClock, aware

pytestmark = pytest.mark.django_db


def _rate(doctor, *ratings):
    for i, r in enumerate(ratings):
        p = Patient.objects.create(name=f'Patient {doctor.id}-{i}')
        Feedback.objects.create(patient=p, doctor=doctor, rating=r, message='note')


def test_average_rating_empty_is_zero():
    assert AnalyticsAggregator().average_feedback_rating() == 0


def test_average_rating_of_five_and_one(doctor):
    _rate(doctor, 5, 1)
    assert AnalyticsAggregator().average_feedback_rating() == 3.0


def test_sentiment_buckets(doctor):
    _rate(doctor, 5, 4, 3, 2, 1)
    s = AnalyticsAggregator().feedback_sentiment()
    assert s.as_dict() == {'positive': 2, 'neutral': 1, 'negative': 2}


def test_sentiment_empty():
    assert AnalyticsAggregator().feedback_sentiment().as_dict() == {'positive': 0, 'neutral': 0, 'negative': 0}


def test_doctor_ratings_only_rated_doctors(doctor, other_doctor):
    Doctor.objects.create(name='Dr. Unrated', specialty='Surgery')
    _rate(doctor, 4, 2)
    _rate(other_doctor, 5)
    ratings = AnalyticsAggregator().doctor_ratings()
    assert [(r.doctor, r.average) for r in ratings] == [('Dr. House', 3.0), ('Dr. Wilson', 5.0)]


def test_weekly_counts_are_chronological_across_years(doctor, patient):
    for when in [aware(2025, 1, 7, 9), aware(2024, 12, 30, 10), aware(2024, 4, 2, 9), aware(2025, 1, 8, 9)]:
        Appointment.objects.create(patient=patient, doctor=doctor, date=when)
    weeks = AnalyticsAggregator().weekly_appointment_counts()
    assert [w.week_start for w in weeks] == [date(2024, 4, 1), date(2024, 12, 30), date(2025, 1, 6)]
    assert [w.count for w in weeks] == [1, 1, 2]
    assert weeks[0].label == week_label(date(2024, 4, 1))


def test_week_label_spans_monday_to_sunday():
    assert week_label(date(2025, 1, 6)) == 'Jan 06 – Jan 12'


def test_status_breakdown(doctor, patient):
    base = aware(2025, 2, 3, 9)
    statuses = [Appointment.STATUS_SCHEDULED, Appointment.STATUS_SCHEDULED, Appointment.STATUS_COMPLETED,
                Appointment.STATUS_CANCELLED]
    for i, status in enumerate(statuses):
        Appointment.objects.create(patient=patient, doctor=doctor, date=base + timedelta(hours=i), status=status)
    b = AnalyticsAggregator().status_breakdown()
    assert (b.scheduled, b.completed, b.cancelled, b.confirmed, b.rejected) == (2, 1, 1, 0, 0)


def test_kpis_count_recent_by_creation_time(doctor, patient):
    now = aware(2025, 3, 1, 12)
    recent = Appointment.objects.create(patient=patient, doctor=doctor, date=aware(2025, 3, 5, 9))
    old = Appointment.objects.create(patient=patient, doctor=doctor, date=aware(2025, 3, 5, 10))
    Appointment.objects.filter(pk=recent.pk).update(created_at=now - timedelta(days=2))
    Appointment.objects.filter(pk=old.pk).update(created_at=now - timedelta(days=10))
    _rate(doctor, 4)

    k = AnalyticsAggregator(clock=FixedClock(now)).kpis()
    assert k.total_doctors == 1
    # the feedback helper adds one patient
    assert k.total_patients == 2
    assert k.total_appointments == 2
    assert k.appointments_last_7_days == 1
    assert k.average_rating == 4.0


def test_snapshot_records_metrics(doctor, patient):
    Appointment.objects.create(patient=patient, doctor=doctor, date=aware(2025, 3, 5, 9))
    _rate(doctor, 5, 3)
    now = aware(2025, 3, 1, 12)
    agg = AnalyticsAggregator(clock=FixedClock(now))
    agg.snapshot()
    values = dict(AnalyticsRecord.objects.values_list('metric_name', 'value'))
    assert values == {'AppointmentsScheduled': 1.0, 'AverageRating': 4.0}
    trend = agg.metric_trend('AverageRating')
    assert [p.value for p in trend] == [4.0]
    assert len(agg.recent_records(7)) == 2
