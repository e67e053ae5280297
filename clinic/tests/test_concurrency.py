"""
Two callers racing for the same slot or the same feedback pair.

These need real row locks and separate connections, so they run only on
backends with ``SELECT ... FOR UPDATE`` (PostgreSQL, MySQL).
"""
import threading

import pytest
from django.db import connection, connections

from clinic.models import Appointment, Feedback
from clinic.services.errors import ClinicError, ConflictError, DuplicateError
from clinic.services.feedback import FeedbackAggregator
from clinic.services.scheduling import AppointmentScheduler

from .helpers import FixedClock, aware

pytestmark = [
    pytest.mark.django_db(transaction=True),
    pytest.mark.skipif(not connection.features.has_select_for_update,
                       reason='backend has no row locks'),
]


def run_together(*calls):
    """Start every call at the same moment in its own thread; return results or errors."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def worker(i, call):
        try:
            barrier.wait()
            outcomes[i] = call()
        except ClinicError as e:
            outcomes[i] = e
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker, args=(i, c)) for i, c in enumerate(calls)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return outcomes


def test_concurrent_bookings_for_one_slot(doctor, patient, other_patient):
    scheduler = AppointmentScheduler(clock=FixedClock(aware(2025, 1, 1, 8)))
    when = aware(2025, 1, 10, 10)
    outcomes = run_together(
        lambda: scheduler.book(patient.id, doctor.id, when),
        lambda: scheduler.book(other_patient.id, doctor.id, when),
    )
    booked = [o for o in outcomes if isinstance(o, Appointment)]
    assert len(booked) == 1
    assert sum(isinstance(o, ConflictError) for o in outcomes) == 1
    assert Appointment.objects.filter(doctor=doctor, date=when, status=Appointment.STATUS_SCHEDULED).count() == 1


def test_concurrent_feedback_from_one_patient(doctor, patient):
    agg = FeedbackAggregator()
    outcomes = run_together(
        lambda: agg.submit(patient.id, doctor.id, 5, 'Great'),
        lambda: agg.submit(patient.id, doctor.id, 2, 'Slow'),
    )
    assert sum(isinstance(o, Feedback) for o in outcomes) == 1
    assert sum(isinstance(o, DuplicateError) for o in outcomes) == 1
    assert Feedback.objects.filter(patient=patient, doctor=doctor).count() == 1
