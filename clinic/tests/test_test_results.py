import pytest

from clinic.models import Appointment, TestResult
from clinic.services.errors import InvalidInput, NotFoundError
from clinic.services.test_results import format_test_result, get_test_result, results_for_patient, upload_test_result

from .helpers import aware

pytestmark = pytest.mark.django_db


def test_upload_and_list(doctor, patient):
    older = upload_test_result(doctor.id, patient.id, 'X-Ray', 'Clear', performed_at=aware(2025, 1, 2, 9))
    newer = upload_test_result(doctor.id, patient.id, 'Blood panel', 'Normal', performed_at=aware(2025, 1, 5, 9))
    assert [r.id for r in results_for_patient(patient.id)] == [newer.id, older.id]
    data = format_test_result(results_for_patient(patient.id)[0])
    assert data['doctorName'] == doctor.name
    assert data['testName'] == 'Blood panel'


def test_upload_requires_text(doctor, patient):
    with pytest.raises(InvalidInput):
        upload_test_result(doctor.id, patient.id, ' ', 'Normal')
    with pytest.raises(InvalidInput):
        upload_test_result(doctor.id, patient.id, 'ECG', '<b></b>')
    assert not TestResult.objects.exists()


def test_appointment_must_belong_to_patient(doctor, patient, other_patient):
    appt = Appointment.objects.create(patient=other_patient, doctor=doctor, date=aware(2025, 1, 10, 9))
    with pytest.raises(InvalidInput):
        upload_test_result(doctor.id, patient.id, 'ECG', 'Normal', appointment_id=appt.id)
    tr = upload_test_result(doctor.id, other_patient.id, 'ECG', 'Normal', appointment_id=appt.id)
    assert tr.appointment_id == appt.id


def test_missing_records(doctor, patient):
    with pytest.raises(NotFoundError):
        upload_test_result(doctor.id, 99999, 'ECG', 'Normal')
    with pytest.raises(NotFoundError):
        get_test_result(12345)


def test_result_text_is_stored_without_markup(doctor, patient):
    tr = upload_test_result(doctor.id, patient.id, '<b>ECG</b>', '<i>Normal</i> rhythm')
    tr.refresh_from_db()
    assert (tr.test_name, tr.result) == ('ECG', 'Normal rhythm')
