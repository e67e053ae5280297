"""
Patient feedback: submission, duplicate prevention and rating averages.

A patient may rate a given doctor once.  The existence check and the
insert share one transaction holding a lock on the patient row, and the
``(patient, doctor)`` unique constraint turns any remaining race into a
:class:`DuplicateError` instead of a second row.
"""
from __future__ import annotations

from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Avg

from clinic.models import Doctor, Feedback, Patient
from clinic.services.audit import log_action
from clinic.services.errors import DuplicateError, InvalidInput, NotFoundError
from clinic.services.text import clean_text
from clinic.services.validation import validate_feedback


class FeedbackAggregator:

    def __init__(self, using: Optional[str] = None):
        self.using = using

    @property
    def write_alias(self) -> str:
        return self.using or 'default'

    def _already_submitted(self, alias: str, patient: Patient, doctor_id: int) -> bool:
        return Feedback.objects.using(alias).filter(patient=patient, doctor_id=doctor_id).exists()

    def submit(self, patient_id: int, doctor_id: int, rating: int, message: str) -> Feedback:
        message = clean_text(message)
        check = validate_feedback(message, rating)
        if not check:
            raise InvalidInput(check.message)

        alias = self.write_alias
        with transaction.atomic(using=alias):
            patient = Patient.objects.using(alias).select_for_update().filter(pk=patient_id).first()
            if patient is None:
                raise NotFoundError('Patient not found.')
            if not Doctor.objects.using(alias).filter(pk=doctor_id).exists():
                raise NotFoundError('Doctor not found.')
            if self._already_submitted(alias, patient, doctor_id):
                raise DuplicateError()
            try:
                with transaction.atomic(using=alias):
                    fb = Feedback.objects.using(alias).create(
                        patient=patient, doctor_id=doctor_id, rating=rating, message=message
                    )
            except IntegrityError:
                raise DuplicateError() from None
            log_action(action='feedback_submit', object_type='feedback', object_id=fb.id,
                       detail={'patientId': patient_id, 'doctorId': doctor_id, 'rating': rating},
                       using=alias)
        return fb

    def has_submitted(self, patient_id: int, doctor_id: int) -> bool:
        return Feedback.objects.db_manager(self.using).filter(patient_id=patient_id, doctor_id=doctor_id).exists()

    def average_rating(self, doctor_id: Optional[int] = None) -> float:
        qs = Feedback.objects.db_manager(self.using).all()
        if doctor_id is not None:
            qs = qs.filter(doctor_id=doctor_id)
        avg = qs.aggregate(avg=Avg('rating'))['avg']
        return float(avg) if avg is not None else 0.0

    def all_feedback(self) -> list[Feedback]:
        qs = Feedback.objects.db_manager(self.using).select_related('patient', 'doctor')
        return list(qs.order_by('-created_at', '-id'))

    def feedback_for_doctor(self, doctor_id: int) -> list[Feedback]:
        qs = Feedback.objects.db_manager(self.using).filter(doctor_id=doctor_id).select_related('patient')
        return list(qs.order_by('-created_at', '-id'))


def format_feedback(fb: Feedback) -> dict:
    data = {
        'id': fb.id,
        'patientId': fb.patient_id,
        'doctorId': fb.doctor_id,
        'rating': fb.rating,
        'message': fb.message,
        'createdAt': fb.created_at.isoformat(),
    }
    if Feedback.patient.is_cached(fb):
        data['patientName'] = fb.patient.name
    if Feedback.doctor.is_cached(fb):
        data['doctorName'] = fb.doctor.name
    return data
