from rest_framework import serializers


class FeedbackSubmitSerializer(serializers.Serializer):
    """Shape only; content rules live in ``validate_feedback``."""
    doctorId = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField()
    message = serializers.CharField(allow_blank=True, trim_whitespace=False)
