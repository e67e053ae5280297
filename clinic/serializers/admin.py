from rest_framework import serializers


class DoctorWriteSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)
    specialty = serializers.CharField(allow_blank=True)
    departmentId = serializers.IntegerField(required=False, allow_null=True)


class DepartmentWriteSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)


class ResourceWriteSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)
    type = serializers.CharField(allow_blank=True)
    quantity = serializers.IntegerField()


class LogQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True)
    take = serializers.IntegerField(required=False, min_value=1, max_value=1000)
