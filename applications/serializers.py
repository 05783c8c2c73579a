from rest_framework import serializers
from core.serializers import StrictFieldsMixin
from .models import Application


class ApplicationSerializer(serializers.ModelSerializer):
    """Application plus whichever joined display names the query annotated"""
    internshipId = serializers.IntegerField(source='internship_id', read_only=True)
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    resumeUrl = serializers.CharField(source='resume_url', read_only=True)
    appliedAt = serializers.DateTimeField(source='applied_at', read_only=True)
    internshipTitle = serializers.CharField(source='internship_title', read_only=True, default=None)
    studentName = serializers.CharField(source='student_name', read_only=True, default=None)

    class Meta:
        model = Application
        fields = [
            'id', 'internshipId', 'studentId', 'resumeUrl', 'status',
            'appliedAt', 'internshipTitle', 'studentName',
        ]
        read_only_fields = fields


class ApplicationCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    internshipId = serializers.IntegerField(source='internship_id', min_value=1)
    resumeUrl = serializers.URLField(source='resume_url', max_length=500)
    # Server-assigned; accepted in the body but never used
    status = serializers.CharField(read_only=True)
    appliedAt = serializers.DateTimeField(read_only=True)

    def validate_internshipId(self, value):
        if self.context['storage'].get_internship(value) is None:
            raise serializers.ValidationError("Internship not found.")
        return value


class StatusUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    # Allowed values are enforced by core.lifecycle so bad values raise InvalidStatus
    status = serializers.CharField(required=False, allow_null=True, allow_blank=True)
