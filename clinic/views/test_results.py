from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import User
from clinic.permissions import IsDoctorOrPatient, IsDoctorRole, IsPatientRole, doctor_for, patient_for
from clinic.serializers.test_results import TestResultUploadSerializer
from clinic.services.test_results import (
    format_test_result,
    get_test_result,
    results_for_patient,
    upload_test_result,
)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def upload_result(request):
    s = TestResultUploadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    doctor = doctor_for(request.user)
    tr = upload_test_result(
        doctor.id, vd['patientId'], vd['testName'], vd['result'],
        appointment_id=vd.get('appointmentId'), performed_at=vd.get('datePerformed'),
    )
    return Response({'ok': True, 'data': format_test_result(tr)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPatientRole])
def my_results(request):
    patient = patient_for(request.user)
    return Response({'ok': True, 'data': [format_test_result(tr) for tr in results_for_patient(patient.id)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorOrPatient])
def result_detail(request, pk: int):
    tr = get_test_result(pk)
    # patients only see their own results
    if request.user.role == User.ROLE_PATIENT and tr.patient_id != patient_for(request.user).id:
        raise PermissionDenied('This test result belongs to another patient.')
    return Response({'ok': True, 'data': format_test_result(tr)})
