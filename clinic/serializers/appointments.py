from rest_framework import serializers


class SlotQuerySerializer(serializers.Serializer):
    doctorId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()


class BookAppointmentSerializer(serializers.Serializer):
    doctorId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    hour = serializers.IntegerField(min_value=0, max_value=23)


class AppointmentActionSerializer(serializers.Serializer):
    appointmentId = serializers.IntegerField(min_value=1)
