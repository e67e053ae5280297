"""
Appointment scheduling: availability, booking and status workflow.

Clinic hours are 09:00 to 16:00 with one-hour slots.  A slot is taken
only by a *Scheduled* appointment for the same doctor at exactly the
same timestamp; adjacent times never conflict.

Booking runs check-then-insert inside one transaction that holds a row
lock on the doctor, so two callers booking the same doctor are
serialized.  The partial unique constraint on ``Appointment`` is the
backstop for backends where ``select_for_update`` is a no-op; an
``IntegrityError`` from it is reported as a :class:`ConflictError`.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Callable, Iterator, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from clinic.models import Appointment, Doctor, Patient
from clinic.services.audit import log_action
from clinic.services.errors import ConflictError, InvalidInput, NotFoundError, NotOwnerError, PastDateError

CLINIC_OPEN_HOUR = 9
SLOTS_PER_DAY = 8


def slot_datetime(day: date, hour: int) -> datetime:
    """Return ``day`` at ``hour``:00 as an aware datetime in the current timezone."""
    if not 0 <= hour <= 23:
        raise InvalidInput('Hour must be between 0 and 23.')
    return timezone.make_aware(datetime.combine(day, time(hour=hour)))


def clinic_slots(day: date) -> tuple[datetime, ...]:
    return tuple(slot_datetime(day, CLINIC_OPEN_HOUR + i) for i in range(SLOTS_PER_DAY))


class SlotSequence:
    """Free slots of one doctor on one day.

    Nothing is read until the first iteration; the taken slots are then
    cached so the sequence can be iterated again with the same result.
    """

    def __init__(self, candidates: tuple[datetime, ...], taken_query):
        self._candidates = candidates
        self._taken_query = taken_query
        self._taken: Optional[frozenset] = None

    def _taken_slots(self) -> frozenset:
        if self._taken is None:
            self._taken = frozenset(self._taken_query)
        return self._taken

    def __iter__(self) -> Iterator[datetime]:
        taken = self._taken_slots()
        return (slot for slot in self._candidates if slot not in taken)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, item) -> bool:
        return item in self._candidates and item not in self._taken_slots()

    def __repr__(self) -> str:
        return f"SlotSequence({[s.strftime('%H:%M') for s in self]})"


class AppointmentScheduler:
    """Booking rules for one database alias.

    ``using`` selects the store (``None`` lets the router decide for plain
    reads; locked sections always run on the write alias).  ``clock``
    returns the current time and is injectable for tests.
    """

    def __init__(self, using: Optional[str] = None, clock: Optional[Callable[[], datetime]] = None,
                 enforce_ownership: Optional[bool] = None):
        self.using = using
        self.clock = clock or timezone.now
        if enforce_ownership is None:
            enforce_ownership = getattr(settings, 'CLINIC_ENFORCE_DOCTOR_OWNERSHIP', False)
        self.enforce_ownership = enforce_ownership

    @property
    def write_alias(self) -> str:
        return self.using or 'default'

    # -- availability ---------------------------------------------------

    def available_slots(self, doctor_id: int, day: date) -> SlotSequence:
        candidates = clinic_slots(day)
        taken = (
            Appointment.objects.db_manager(self.using)
            .filter(doctor_id=doctor_id, status=Appointment.STATUS_SCHEDULED, date__in=candidates)
            .values_list('date', flat=True)
        )
        return SlotSequence(candidates, taken)

    # -- booking --------------------------------------------------------

    def _slot_taken(self, alias: str, doctor: Doctor, when: datetime) -> bool:
        return Appointment.objects.using(alias).filter(
            doctor=doctor, date=when, status=Appointment.STATUS_SCHEDULED
        ).exists()

    def book(self, patient_id: int, doctor_id: int, when: datetime) -> Appointment:
        if timezone.is_naive(when):
            when = timezone.make_aware(when)
        if when < self.clock():
            raise PastDateError()

        alias = self.write_alias
        with transaction.atomic(using=alias):
            doctor = Doctor.objects.using(alias).select_for_update().filter(pk=doctor_id).first()
            if doctor is None:
                raise NotFoundError('Doctor not found.')
            if not Patient.objects.using(alias).filter(pk=patient_id).exists():
                raise NotFoundError('Patient not found.')
            if self._slot_taken(alias, doctor, when):
                raise ConflictError()
            try:
                with transaction.atomic(using=alias):
                    appt = Appointment.objects.using(alias).create(
                        patient_id=patient_id, doctor=doctor, date=when,
                        status=Appointment.STATUS_SCHEDULED,
                    )
            except IntegrityError:
                raise ConflictError() from None
            log_action(action='appointment_book', object_type='appointment', object_id=appt.id,
                       detail={'patientId': patient_id, 'doctorId': doctor_id, 'date': when.isoformat()},
                       using=alias)
        return appt

    def book_slot(self, patient_id: int, doctor_id: int, day: date, hour: int) -> Appointment:
        return self.book(patient_id, doctor_id, slot_datetime(day, hour))

    # -- status workflow ------------------------------------------------

    def _locked(self, appointment_id: int) -> Appointment:
        appt = (
            Appointment.objects.using(self.write_alias)
            .select_for_update()
            .filter(pk=appointment_id)
            .first()
        )
        if appt is None:
            raise NotFoundError('Appointment not found.')
        return appt

    def _set_status(self, appt: Appointment, new_status: str, action: str, detail: dict) -> Appointment:
        if appt.is_terminal:
            raise InvalidInput(f'Appointment is already {appt.status}.')
        old_status = appt.status
        appt.status = new_status
        appt.save(update_fields=['status'], using=self.write_alias)
        log_action(action=action, object_type='appointment', object_id=appt.id,
                   detail={'from': old_status, 'to': new_status, **detail}, using=self.write_alias)
        return appt

    def cancel(self, appointment_id: int, patient_id: int) -> Appointment:
        with transaction.atomic(using=self.write_alias):
            appt = self._locked(appointment_id)
            if appt.patient_id != patient_id:
                raise NotOwnerError('You can only cancel your own appointments.')
            return self._set_status(appt, Appointment.STATUS_CANCELLED, 'appointment_cancel',
                                    {'patientId': patient_id})

    def _doctor_transition(self, appointment_id: int, doctor_id: Optional[int],
                           new_status: str, action: str) -> Appointment:
        with transaction.atomic(using=self.write_alias):
            appt = self._locked(appointment_id)
            if self.enforce_ownership and appt.doctor_id != doctor_id:
                raise NotOwnerError('This appointment belongs to another doctor.')
            return self._set_status(appt, new_status, action, {'doctorId': doctor_id})

    def accept(self, appointment_id: int, doctor_id: Optional[int] = None) -> Appointment:
        return self._doctor_transition(appointment_id, doctor_id, Appointment.STATUS_CONFIRMED, 'appointment_accept')

    def reject(self, appointment_id: int, doctor_id: Optional[int] = None) -> Appointment:
        return self._doctor_transition(appointment_id, doctor_id, Appointment.STATUS_REJECTED, 'appointment_reject')

    def complete(self, appointment_id: int, doctor_id: Optional[int] = None) -> Appointment:
        return self._doctor_transition(appointment_id, doctor_id, Appointment.STATUS_COMPLETED, 'appointment_complete')

    # -- listings -------------------------------------------------------

    def appointments_for_patient(self, patient_id: int) -> list[Appointment]:
        qs = Appointment.objects.db_manager(self.using).filter(patient_id=patient_id)
        return list(qs.select_related('doctor').order_by('-date', '-id'))

    def upcoming_for_doctor(self, doctor_id: int) -> list[Appointment]:
        qs = Appointment.objects.db_manager(self.using).filter(
            doctor_id=doctor_id, status=Appointment.STATUS_SCHEDULED, date__gte=self.clock()
        )
        return list(qs.select_related('patient').order_by('date', 'id'))

    def appointments_for_doctor(self, doctor_id: int) -> list[Appointment]:
        qs = Appointment.objects.db_manager(self.using).filter(doctor_id=doctor_id)
        return list(qs.select_related('patient').prefetch_related('test_results').order_by('-date', '-id'))


def format_appointment(a: Appointment) -> dict:
    data = {
        'id': a.id,
        'patientId': a.patient_id,
        'doctorId': a.doctor_id,
        'date': timezone.localtime(a.date).isoformat(),
        'status': a.status,
    }
    if Appointment.doctor.is_cached(a):
        data['doctorName'] = a.doctor.name
        data['specialty'] = a.doctor.specialty
    if Appointment.patient.is_cached(a):
        data['patientName'] = a.patient.name
    return data
