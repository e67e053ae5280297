import pytest

from django.db import IntegrityError, transaction

from clinic.models import Feedback
from clinic.services.errors import DuplicateError, InvalidInput, NotFoundError
from clinic.services.feedback import FeedbackAggregator, format_feedback

pytestmark = pytest.mark.django_db


def test_submit_and_has_submitted(patient, doctor):
    agg = FeedbackAggregator()
    assert not agg.has_submitted(patient.id, doctor.id)
    fb = agg.submit(patient.id, doctor.id, 4, 'Very thorough.')
    assert fb.rating == 4
    assert agg.has_submitted(patient.id, doctor.id)


def test_second_submission_is_duplicate(patient, doctor):
    agg = FeedbackAggregator()
    agg.submit(patient.id, doctor.id, 5, 'Great')
    with pytest.raises(DuplicateError):
        agg.submit(patient.id, doctor.id, 1, 'Changed my mind')
    assert Feedback.objects.filter(patient=patient, doctor=doctor).count() == 1


def test_same_patient_may_rate_other_doctors(patient, doctor, other_doctor):
    agg = FeedbackAggregator()
    agg.submit(patient.id, doctor.id, 5, 'Great')
    agg.submit(patient.id, other_doctor.id, 3, 'Fine')
    assert Feedback.objects.count() == 2


@pytest.mark.parametrize('rating,message', [
    (0, 'ok'),
    (6, 'ok'),
    (3, ''),
    (3, '   '),
    (3, 'x' * 1001),
])
def test_invalid_feedback_is_rejected(patient, doctor, rating, message):
    with pytest.raises(InvalidInput):
        FeedbackAggregator().submit(patient.id, doctor.id, rating, message)
    assert not Feedback.objects.exists()


def test_message_at_limit_is_accepted(patient, doctor):
    fb = FeedbackAggregator().submit(patient.id, doctor.id, 3, 'x' * 1000)
    assert len(fb.message) == 1000


def test_unknown_doctor(patient):
    with pytest.raises(NotFoundError):
        FeedbackAggregator().submit(patient.id, 424242, 5, 'Great')


def test_markup_is_stripped(patient, doctor):
    fb = FeedbackAggregator().submit(patient.id, doctor.id, 5, '<b>Kind</b> staff')
    assert fb.message == 'Kind staff'


def test_markup_only_message_is_rejected(patient, doctor):
    with pytest.raises(InvalidInput):
        FeedbackAggregator().submit(patient.id, doctor.id, 4, '<script></script>')
    assert not Feedback.objects.exists()


def test_length_limit_applies_to_stored_message(patient, doctor):
    # "&" is stored escaped as "&amp;", which pushes this message past the limit
    with pytest.raises(InvalidInput):
        FeedbackAggregator().submit(patient.id, doctor.id, 4, 'x' * 999 + '&')
    fb = FeedbackAggregator().submit(patient.id, doctor.id, 4, 'x' * 995 + '&')
    assert fb.message == 'x' * 995 + '&amp;'


def test_average_rating(patient, other_patient, doctor, other_doctor):
    agg = FeedbackAggregator()
    assert agg.average_rating() == 0
    agg.submit(patient.id, doctor.id, 5, 'Great')
    agg.submit(other_patient.id, doctor.id, 1, 'Poor')
    agg.submit(patient.id, other_doctor.id, 4, 'Good')
    assert agg.average_rating(doctor.id) == 3.0
    assert agg.average_rating() == pytest.approx(10 / 3)
    assert agg.average_rating(999999) == 0.0


def test_format_feedback_includes_names(patient, doctor):
    agg = FeedbackAggregator()
    agg.submit(patient.id, doctor.id, 5, 'Great')
    data = format_feedback(agg.all_feedback()[0])
    assert data['patientName'] == patient.name
    assert data['doctorName'] == doctor.name
    assert data['rating'] == 5


def test_unique_pair_rejects_second_row(patient, doctor):
    Feedback.objects.create(patient=patient, doctor=doctor, rating=5, message='Great')
    with pytest.raises(IntegrityError), transaction.atomic():
        Feedback.objects.create(patient=patient, doctor=doctor, rating=2, message='Again')
    assert Feedback.objects.count() == 1


def test_insert_race_is_reported_as_duplicate(patient, doctor, monkeypatch):
    agg = FeedbackAggregator()
    agg.submit(patient.id, doctor.id, 5, 'Great')
    # a concurrent writer committed between the existence check and the insert
    monkeypatch.setattr(FeedbackAggregator, '_already_submitted', lambda self, alias, p, d: False)
    with pytest.raises(DuplicateError):
        agg.submit(patient.id, doctor.id, 1, 'Second try')
    assert Feedback.objects.filter(patient=patient, doctor=doctor).count() == 1
    assert Feedback.objects.get().rating == 5
