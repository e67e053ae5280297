"""
Patient and doctor endpoints for the appointment workflow.

Domain errors raised by the scheduler (conflict, past date, not owner,
terminal status) propagate to ``api_exception_handler``.
"""
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsDoctorRole, IsPatientRole, doctor_for, patient_for
from clinic.serializers.appointments import (
    AppointmentActionSerializer,
    BookAppointmentSerializer,
    SlotQuerySerializer,
)
from clinic.services.scheduling import AppointmentScheduler, format_appointment
from clinic.throttles import BookingRateThrottle


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def available_slots(request):
    s = SlotQuerySerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    slots = AppointmentScheduler().available_slots(vd['doctorId'], vd['date'])
    return Response({'ok': True, 'data': [
        {'time': slot.isoformat(), 'hour': slot.hour, 'label': slot.strftime('%H:%M')} for slot in slots
    ]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPatientRole])
@throttle_classes([BookingRateThrottle])
def book_appointment(request):
    s = BookAppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    patient = patient_for(request.user)
    appt = AppointmentScheduler().book_slot(patient.id, vd['doctorId'], vd['date'], vd['hour'])
    return Response({'ok': True, 'data': format_appointment(appt)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPatientRole])
def cancel_appointment(request):
    s = AppointmentActionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = patient_for(request.user)
    appt = AppointmentScheduler().cancel(s.validated_data['appointmentId'], patient.id)
    return Response({'ok': True, 'data': format_appointment(appt)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPatientRole])
def my_appointments(request):
    patient = patient_for(request.user)
    items = AppointmentScheduler().appointments_for_patient(patient.id)
    return Response({'ok': True, 'data': [format_appointment(a) for a in items]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def doctor_appointments(request):
    """Doctor schedule; ``?upcoming=1`` limits it to future Scheduled visits."""
    doctor = doctor_for(request.user)
    scheduler = AppointmentScheduler()
    if request.query_params.get('upcoming') in ('1', 'true'):
        items = scheduler.upcoming_for_doctor(doctor.id)
    else:
        items = scheduler.appointments_for_doctor(doctor.id)
    return Response({'ok': True, 'data': [format_appointment(a) for a in items]})


def _doctor_action(request, action: str):
    s = AppointmentActionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = doctor_for(request.user)
    scheduler = AppointmentScheduler()
    appt = getattr(scheduler, action)(s.validated_data['appointmentId'], doctor_id=doctor.id)
    return Response({'ok': True, 'data': format_appointment(appt)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def accept_appointment(request):
    return _doctor_action(request, 'accept')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def reject_appointment(request):
    return _doctor_action(request, 'reject')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def complete_appointment(request):
    return _doctor_action(request, 'complete')
