from rest_framework import serializers


class TestResultUploadSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    testName = serializers.CharField(allow_blank=True)
    result = serializers.CharField(allow_blank=True)
    appointmentId = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    datePerformed = serializers.DateTimeField(required=False, allow_null=True)
