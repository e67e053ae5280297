from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole, IsDoctorRole, IsPatientRole, doctor_for, patient_for
from clinic.serializers.feedback import FeedbackSubmitSerializer
from clinic.services.feedback import FeedbackAggregator, format_feedback


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPatientRole])
def submit_feedback(request):
    s = FeedbackSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    patient = patient_for(request.user)
    fb = FeedbackAggregator().submit(patient.id, vd['doctorId'], vd['rating'], vd['message'])
    return Response({'ok': True, 'data': format_feedback(fb)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def doctor_feedback(request):
    """Feedback left for the calling doctor, with their average rating."""
    doctor = doctor_for(request.user)
    agg = FeedbackAggregator()
    items = agg.feedback_for_doctor(doctor.id)
    return Response({'ok': True, 'data': {
        'average': agg.average_rating(doctor.id),
        'items': [format_feedback(fb) for fb in items],
    }})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def all_feedback(request):
    agg = FeedbackAggregator()
    return Response({'ok': True, 'data': {
        'average': agg.average_rating(),
        'items': [format_feedback(fb) for fb in agg.all_feedback()],
    }})
