from rest_framework import serializers
from core.serializers import StrictFieldsMixin
from .models import Internship


class InternshipSerializer(serializers.ModelSerializer):
    """Internship as returned to clients, with the owning company's username"""
    companyId = serializers.IntegerField(source='company_id', read_only=True)
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True)
    companyName = serializers.CharField(source='company_name', read_only=True, default=None)

    class Meta:
        model = Internship
        fields = [
            'id', 'companyId', 'companyName', 'title', 'description',
            'requirements', 'location', 'startDate', 'endDate',
        ]
        read_only_fields = fields


class InternshipWriteSerializer(StrictFieldsMixin, serializers.Serializer):
    """
    Body of internship create/update. Use ``partial=True`` for PATCH so that
    omitted fields keep their stored values.
    """
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    requirements = serializers.CharField()
    location = serializers.CharField(max_length=255)
    # Calendar dates only; the end date is not checked against the start date
    startDate = serializers.DateField(source='start_date', input_formats=['%Y-%m-%d'])
    endDate = serializers.DateField(source='end_date', input_formats=['%Y-%m-%d'])


class AdminInternshipCreateSerializer(InternshipWriteSerializer):
    """Admins must name the company the internship belongs to"""
    companyId = serializers.IntegerField(source='company_id')

    def validate_companyId(self, value):
        company = self.context['storage'].get_user(value)
        if company is None or company.role != 'company':
            raise serializers.ValidationError("companyId must reference an existing company account.")
        return value
